from __future__ import annotations

from typing import TYPE_CHECKING

from domaingen.annotations import FieldScope
from domaingen.core.resolver import get_domain_field

if TYPE_CHECKING:
    from domaingen.schema.descriptors import FieldDescriptor


def has_scope(field: FieldDescriptor, scope: FieldScope) -> bool:
    annotation = get_domain_field(field)
    if annotation is None:
        return False
    return scope in annotation.scopes


is_in_scope = has_scope


def is_required(field: FieldDescriptor, scope: FieldScope) -> bool:
    """Required only within the generated input shape of ``scope``."""
    annotation = get_domain_field(field)
    if annotation is None:
        return False
    return annotation.required.get(scope, False)
