"""Schema descriptors handed to the generator by the host model framework.

These are plain dataclasses, not ORM objects. ``annotations`` is the generic
per-field bag: values arrive either as annotation models built in-process or
as plain dicts reconstituted from a serialized schema.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from domaingen.core.naming import pascal_case
from domaingen.core.resolver import get_domain_config

_PYTHON_TYPES = {
    "str": "str",
    "bool": "bool",
    "datetime": "datetime",
    "int": "int",
    "int32": "int",
    "int64": "int",
    "float": "float",
    "uuid": "UUID",
    "bytes": "bytes",
    "json": "dict[str, Any]",
}


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type_name: str
    enum_type: str | None = None
    nillable: bool = False
    unique: bool = False
    immutable: bool = False
    has_default: bool = False
    annotations: Mapping[str, Any] = field(default_factory=dict)

    @property
    def struct_name(self) -> str:
        return pascal_case(self.name)

    @property
    def is_enum(self) -> bool:
        return self.type_name == "enum"

    @property
    def enum_class(self) -> str:
        """Name of the enum class the ORM module exposes for this field."""
        return self.enum_type or self.struct_name

    @property
    def python_type(self) -> str:
        if self.is_enum:
            return self.enum_class
        if self.type_name.startswith(("list[", "dict[")):
            return self.type_name
        if self.type_name == "list":
            return "list[Any]"
        if self.type_name == "dict":
            return "dict[str, Any]"
        return _PYTHON_TYPES.get(self.type_name, "Any")


@dataclass(frozen=True)
class TypeDescriptor:
    name: str
    id: FieldDescriptor
    fields: tuple[FieldDescriptor, ...] = ()
    annotations: Mapping[str, Any] = field(default_factory=dict)

    @property
    def entity_name(self) -> str:
        config = get_domain_config(self)
        if config is not None and config.entity_name:
            return config.entity_name
        return self.name

    def field_named(self, name: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None
