"""Serialized schema files.

Annotations are written in their canonical map form and come back as plain
dicts; the resolver turns them into annotation models on demand.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor


class FieldSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type_name: str = Field(alias="type")
    enum_type: str | None = None
    nillable: bool = False
    unique: bool = False
    immutable: bool = False
    has_default: bool = Field(default=False, alias="default")
    annotations: dict[str, Any] = Field(default_factory=dict)

    def to_descriptor(self) -> FieldDescriptor:
        return FieldDescriptor(
            name=self.name,
            type_name=self.type_name,
            enum_type=self.enum_type,
            nillable=self.nillable,
            unique=self.unique,
            immutable=self.immutable,
            has_default=self.has_default,
            annotations=self.annotations,
        )


class TypeSchema(BaseModel):
    name: str
    id: FieldSchema
    fields: list[FieldSchema] = Field(default_factory=list)
    annotations: dict[str, Any] = Field(default_factory=dict)

    def to_descriptor(self) -> TypeDescriptor:
        return TypeDescriptor(
            name=self.name,
            id=self.id.to_descriptor(),
            fields=tuple(f.to_descriptor() for f in self.fields),
            annotations=self.annotations,
        )


class SchemaFile(BaseModel):
    types: list[TypeSchema] = Field(default_factory=list)


def _annotation_maps(annotations: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in annotations.items():
        if isinstance(value, BaseModel):
            to_map = getattr(value, "to_map", None)
            result[key] = to_map() if to_map is not None else value.model_dump(mode="json")
        else:
            result[key] = value
    return result


def _field_schema(field: FieldDescriptor) -> FieldSchema:
    return FieldSchema(
        name=field.name,
        type_name=field.type_name,
        enum_type=field.enum_type,
        nillable=field.nillable,
        unique=field.unique,
        immutable=field.immutable,
        has_default=field.has_default,
        annotations=_annotation_maps(field.annotations),
    )


def load_schema(path: str | Path) -> list[TypeDescriptor]:
    schema = SchemaFile.model_validate_json(Path(path).read_text(encoding="utf-8"))
    return [t.to_descriptor() for t in schema.types]


def dump_schema(types: Iterable[TypeDescriptor], path: str | Path) -> None:
    schema = SchemaFile(
        types=[
            TypeSchema(
                name=t.name,
                id=_field_schema(t.id),
                fields=[_field_schema(f) for f in t.fields],
                annotations=_annotation_maps(t.annotations),
            )
            for t in types
        ]
    )
    Path(path).write_text(schema.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")


def load_source(source: str) -> list[TypeDescriptor]:
    """Load types from a ``.json`` schema file or an importable model module."""
    if source.endswith(".json"):
        return load_schema(source)
    from importlib import import_module

    from domaingen.schema.introspect import describe_module

    return describe_module(import_module(source))
