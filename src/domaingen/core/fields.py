"""Field selection over a type's declared fields.

Every selector preserves declaration order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from domaingen.annotations import FieldScope
from domaingen.core.resolver import get_domain_field
from domaingen.core.scope import has_scope
from domaingen.core.typechecks import is_complex_type

if TYPE_CHECKING:
    from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor


def domain_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    return [f for f in type_.fields if get_domain_field(f) is not None]


def _scoped(type_: TypeDescriptor, scope: FieldScope) -> list[FieldDescriptor]:
    return [f for f in type_.fields if has_scope(f, scope)]


def create_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    return _scoped(type_, FieldScope.CREATE)


def update_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    return _scoped(type_, FieldScope.UPDATE)


def response_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    return _scoped(type_, FieldScope.RESPONSE)


def query_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    """Fields with the query scope, plus searchable fields without it."""
    fields: list[FieldDescriptor] = []
    for f in type_.fields:
        annotation = get_domain_field(f)
        if annotation is not None and (annotation.searchable or FieldScope.QUERY in annotation.scopes):
            fields.append(f)
    return fields


def searchable_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    fields: list[FieldDescriptor] = []
    for f in type_.fields:
        annotation = get_domain_field(f)
        if annotation is not None and annotation.searchable:
            fields.append(f)
    return fields


def sortable_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    fields: list[FieldDescriptor] = []
    for f in type_.fields:
        annotation = get_domain_field(f)
        if annotation is not None and annotation.sortable and not is_complex_type(f.type_name):
            fields.append(f)
    return fields


def updateable_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    """Fields the storage layer may write on update, regardless of HTTP scopes.

    Excludes the id field and fields marked immutable in the schema.
    """
    fields: list[FieldDescriptor] = []
    for f in type_.fields:
        if f.name == type_.id.name or f.immutable:
            continue
        if get_domain_field(f) is not None:
            fields.append(f)
    return fields


def non_default_domain_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    """Annotated fields without a schema default; create leaves the rest to storage."""
    return [f for f in domain_fields(type_) if not f.has_default]


def default_domain_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    return [f for f in domain_fields(type_) if f.has_default]


def unique_lookup_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    fields: list[FieldDescriptor] = []
    for f in type_.fields:
        annotation = get_domain_field(f)
        if annotation is not None and annotation.unique_lookup:
            fields.append(f)
    return fields


def range_lookup_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    fields: list[FieldDescriptor] = []
    for f in type_.fields:
        annotation = get_domain_field(f)
        if annotation is not None and annotation.range_lookup:
            fields.append(f)
    return fields


def lookup_fields(type_: TypeDescriptor) -> list[FieldDescriptor]:
    """Fields with either lookup flag set, independent of their scopes."""
    fields: list[FieldDescriptor] = []
    for f in type_.fields:
        annotation = get_domain_field(f)
        if annotation is not None and (annotation.unique_lookup or annotation.range_lookup):
            fields.append(f)
    return fields
