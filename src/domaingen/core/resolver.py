"""Resolve annotation values from a field's generic annotation bag.

Annotations arrive as annotation models when a schema is built in-process,
but as plain dicts when it is loaded from a serialized form. Both shapes
normalize to the same model; a malformed dict resolves to ``None``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from domaingen.annotations import DomainConfig, DomainField

if TYPE_CHECKING:
    from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def resolve_annotation(store: Mapping[str, Any] | None, key: str, model: type[M]) -> M | None:
    if store is None:
        return None
    value = store.get(key)
    if value is None:
        return None

    if isinstance(value, model):
        return value

    if isinstance(value, Mapping):
        try:
            return model.model_validate_json(json.dumps(dict(value)), strict=True)
        except (TypeError, ValueError) as exc:
            logger.debug("Ignoring malformed %s annotation: %s", key, exc)
            return None

    return None


def get_domain_field(field: FieldDescriptor) -> DomainField | None:
    return resolve_annotation(field.annotations, DomainField.NAME, DomainField)


def get_domain_config(type_: TypeDescriptor) -> DomainConfig | None:
    return resolve_annotation(type_.annotations, DomainConfig.NAME, DomainConfig)
