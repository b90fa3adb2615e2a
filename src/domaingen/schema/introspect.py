"""Build descriptors from SQLAlchemy declarative models.

Field annotations live in ``Column.info``; entity annotations in ``Table.info``::

    class User(Base):
        __tablename__ = "users"
        __table_args__ = {"info": {DomainConfig.NAME: DomainConfig(entity_name="Account")}}

        id: Mapped[int] = mapped_column(primary_key=True, info={DomainField.NAME: id_field()})
        email: Mapped[str] = mapped_column(unique=True, info={DomainField.NAME: default_field()})
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Any

from sqlalchemy import (
    ARRAY,
    JSON,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    Integer,
    LargeBinary,
    Numeric,
    SmallInteger,
    String,
    Uuid,
)
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper
from sqlalchemy.schema import Column

from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)

# Order matters: Enum subclasses String and BigInteger/SmallInteger subclass Integer.
_COLUMN_TYPES: tuple[tuple[type[Any], str], ...] = (
    (Enum, "enum"),
    (Boolean, "bool"),
    (DateTime, "datetime"),
    (Date, "datetime"),
    (BigInteger, "int64"),
    (SmallInteger, "int32"),
    (Integer, "int"),
    (Float, "float"),
    (Numeric, "float"),
    (Uuid, "uuid"),
    (JSON, "json"),
    (ARRAY, "list"),
    (LargeBinary, "bytes"),
    (String, "str"),
)


def _type_name(column: Column[Any]) -> str:
    for sa_type, name in _COLUMN_TYPES:
        if isinstance(column.type, sa_type):
            return name
    logger.debug("Column %s has unmapped type %r", column.name, column.type)
    return type(column.type).__name__.lower()


def _describe_column(key: str, column: Column[Any]) -> FieldDescriptor:
    type_name = _type_name(column)
    enum_type = None
    if type_name == "enum":
        enum_class = getattr(column.type, "enum_class", None)
        enum_type = enum_class.__name__ if enum_class is not None else None
    info = dict(column.info)
    return FieldDescriptor(
        name=key,
        type_name=type_name,
        enum_type=enum_type,
        nillable=bool(column.nullable),
        unique=bool(column.unique),
        immutable=bool(info.get("immutable", False)),
        has_default=column.default is not None or column.server_default is not None,
        annotations=info,
    )


def describe_model(mapped_class: type[Any]) -> TypeDescriptor:
    mapper: Mapper[Any] = sa_inspect(mapped_class)
    if len(mapper.primary_key) != 1:
        raise ValueError(f"{mapped_class.__name__} must have exactly one primary key column")

    pk = mapper.primary_key[0]
    id_descriptor: FieldDescriptor | None = None
    fields: list[FieldDescriptor] = []
    for column in mapper.local_table.columns:
        key = mapper.get_property_by_column(column).key
        descriptor = _describe_column(key, column)
        if column is pk:
            id_descriptor = descriptor
        else:
            fields.append(descriptor)

    if id_descriptor is None:
        raise ValueError(
            f"{mapped_class.__name__} primary key {pk.key} is not a column of table {mapper.local_table.name}"
        )
    return TypeDescriptor(
        name=mapped_class.__name__,
        id=id_descriptor,
        fields=tuple(fields),
        annotations=dict(mapper.local_table.info),
    )


def describe_module(module: ModuleType) -> list[TypeDescriptor]:
    """Describe every mapped class defined in ``module``, in definition order."""
    types: list[TypeDescriptor] = []
    for obj in vars(module).values():
        if not isinstance(obj, type) or obj.__module__ != module.__name__:
            continue
        mapper = sa_inspect(obj, raiseerr=False)
        if isinstance(mapper, Mapper):
            types.append(describe_model(obj))
    return types
