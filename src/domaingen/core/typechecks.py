from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from domaingen.core.resolver import get_domain_field

if TYPE_CHECKING:
    from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor


class FieldKind(Enum):
    """Value kind a filter predicate is synthesized for, decided once per field."""

    TEXT = "text"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    INT32 = "int32"
    INT = "int"
    INT64 = "int64"
    ENUM = "enum"
    UNSUPPORTED = "unsupported"


class IdBacking(Enum):
    STRING = "string"
    INT64 = "int64"
    PASSTHROUGH = "passthrough"


_KINDS_BY_TYPE = {
    "str": FieldKind.TEXT,
    "bool": FieldKind.BOOLEAN,
    "datetime": FieldKind.TIMESTAMP,
    "int32": FieldKind.INT32,
    "int": FieldKind.INT,
    "int64": FieldKind.INT64,
}


def field_kind(field: FieldDescriptor) -> FieldKind:
    if field.is_enum:
        return FieldKind.ENUM
    return _KINDS_BY_TYPE.get(field.type_name, FieldKind.UNSUPPORTED)


def id_backing(type_: TypeDescriptor) -> IdBacking:
    if type_.id.type_name == "str":
        return IdBacking.STRING
    if type_.id.type_name == "int64":
        return IdBacking.INT64
    return IdBacking.PASSTHROUGH


def is_complex_type(type_name: str) -> bool:
    """Lists, maps and opaque blobs have no well-defined ordering."""
    return type_name.startswith(("list", "dict")) or type_name in ("json", "bytes")


def is_time_field(field: FieldDescriptor) -> bool:
    return field.type_name == "datetime"


def is_unique_field(field: FieldDescriptor) -> bool:
    return field.unique


def is_unique_lookup_field(field: FieldDescriptor) -> bool:
    annotation = get_domain_field(field)
    return annotation is not None and annotation.unique_lookup


def has_time_fields(type_: TypeDescriptor) -> bool:
    return any(is_time_field(f) for f in type_.fields if get_domain_field(f) is not None)


def has_time_field(type_: TypeDescriptor, field_name: str) -> bool:
    return any(
        f.name.lower() == field_name and is_time_field(f) for f in type_.fields if get_domain_field(f) is not None
    )
