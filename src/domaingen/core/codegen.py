"""Source fragments spliced into the generated repository and service modules.

Fragments target SQLAlchemy 2.x ``select()``/``delete()`` statements. Inside
generated filter code the ORM class is referenced by the schema type name,
the statement variable is ``query`` and the untyped filter value is ``value``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from domaingen.core.fields import range_lookup_fields, unique_lookup_fields
from domaingen.core.naming import snake_case
from domaingen.core.typechecks import FieldKind, IdBacking, field_kind, id_backing

if TYPE_CHECKING:
    from domaingen.schema.descriptors import FieldDescriptor, TypeDescriptor

T = TypeVar("T")

_INT32_BOUNDS = "-2147483648 <= value <= 2147483647"
_NOT_BOOL = "not isinstance(value, bool)"


def _where(indent: str, orm: str, field: FieldDescriptor, condition: str, expr: str = "value") -> str:
    return f"{indent}if {condition}:\n{indent}    query = query.where({orm}.{field.name} == {expr})"


def _elif_where(indent: str, orm: str, field: FieldDescriptor, condition: str, expr: str) -> str:
    return f"\n{indent}elif {condition}:\n{indent}    query = query.where({orm}.{field.name} == {expr})"


def field_predicate(field: FieldDescriptor, type_: TypeDescriptor, indent: str, skip_empty: bool) -> str:
    """Narrow ``query`` by equality on ``field`` when ``value`` has a matching type.

    With ``skip_empty`` text values must also be non-empty, so an empty search
    filter never turns into a match-everything predicate.
    """
    orm = type_.name
    non_empty = ' and value != ""' if skip_empty else ""
    kind = field_kind(field)

    if kind is FieldKind.ENUM:
        # Plain strings are not instances of the enum class, so both branches are needed.
        enum_cls = field.enum_class
        return _where(indent, orm, field, f"isinstance(value, {enum_cls})") + _elif_where(
            indent, orm, field, f"isinstance(value, str){non_empty}", f"{enum_cls}(value)"
        )
    if kind is FieldKind.TEXT:
        return _where(indent, orm, field, f"isinstance(value, str){non_empty}")
    if kind is FieldKind.BOOLEAN:
        return _where(indent, orm, field, "isinstance(value, bool)")
    if kind is FieldKind.TIMESTAMP:
        return _where(indent, orm, field, "isinstance(value, datetime)")
    if kind is FieldKind.INT:
        return _where(indent, orm, field, f"isinstance(value, int) and {_NOT_BOOL}") + _elif_where(
            indent, orm, field, "isinstance(value, float) and value.is_integer()", "int(value)"
        )
    if kind is FieldKind.INT32:
        return _where(indent, orm, field, f"isinstance(value, int) and {_NOT_BOOL} and {_INT32_BOUNDS}") + _elif_where(
            indent, orm, field, f"isinstance(value, float) and value.is_integer() and {_INT32_BOUNDS}", "int(value)"
        )
    if kind is FieldKind.INT64:
        return _where(indent, orm, field, f"isinstance(value, int) and {_NOT_BOOL}")
    return (
        f"{indent}# unsupported field type: {field.type_name}\n"
        f'{indent}raise NotImplementedError("filtering on {field.name} ({field.type_name}) is not supported")'
    )


def search_method(field: FieldDescriptor, type_: TypeDescriptor) -> str:
    """Filter predicate for the search and count filter loop."""
    return field_predicate(field, type_, " " * 16, True)


def find_by_method(field: FieldDescriptor, type_: TypeDescriptor) -> str:
    """Filter predicate for ``find_by`` / ``find_one_by``."""
    return field_predicate(field, type_, " " * 12, False)


def generate_search_condition(field: FieldDescriptor, type_: TypeDescriptor) -> str:
    if field_kind(field) is not FieldKind.TEXT:
        return ""
    return f"predicates.append({type_.name}.{field.name}.contains(req.query))"


# --- identifiers ------------------------------------------------------------


def id_conversion(type_: TypeDescriptor, id_var: str) -> str:
    """Expression turning the runtime ID in ``id_var`` into a primary key value."""
    backing = id_backing(type_)
    if backing is IdBacking.STRING:
        return f"str({id_var})"
    if backing is IdBacking.INT64:
        return f"{id_var}.to_int()"
    return f"{id_var}.value"


def generate_id_operation(type_: TypeDescriptor, operation: str, id_var: str, indent: str = " " * 8) -> str:
    """Emit the statement for an id-addressed repository operation.

    ``indent`` applies to continuation lines; the template positions the first.
    """
    orm = type_.name
    pk = f"{orm}.{type_.id.name}"
    backing = id_backing(type_)

    if operation == "get":
        return f"entity = await self.session.get({orm}, {id_conversion(type_, id_var)})"
    if operation == "delete":
        return f"result = await self.session.execute(delete({orm}).where({pk} == {id_conversion(type_, id_var)}))"
    if operation == "exists":
        return (
            f"count = await self.session.scalar(\n"
            f"{indent}    select(func.count()).select_from({orm}).where({pk} == {id_conversion(type_, id_var)})\n"
            f"{indent})"
        )
    if operation == "batchDelete":
        if backing is IdBacking.STRING:
            ids_var, convert = "string_ids", "str(i)"
        elif backing is IdBacking.INT64:
            ids_var, convert = "int64_ids", "i.to_int()"
        else:
            ids_var, convert = "raw_ids", "i.value"
        return (
            f"{ids_var} = [{convert} for i in {id_var}]\n"
            f"{indent}await self.session.execute(delete({orm}).where({pk}.in_({ids_var})))"
        )
    return f"# Unknown operation: {operation}"


def id_class(type_: TypeDescriptor) -> str:
    """Runtime ID class backing the generated domain model's ``id``."""
    if type_.id.type_name in ("int", "int32", "int64"):
        return "Int64ID"
    return "StringID"


def wrap_id(type_: TypeDescriptor, expr: str) -> str:
    if id_class(type_) == "Int64ID":
        return f"Int64ID({expr})"
    if type_.id.type_name == "str":
        return f"StringID({expr})"
    return f"StringID(str({expr}))"


# --- assignments ------------------------------------------------------------


def set_field_call(field: FieldDescriptor, type_: TypeDescriptor) -> str:
    """Keyword argument copying a domain value onto a new ORM entity."""
    return f"{field.name}=model.{field.name}"


def generate_orm_to_domain_assignment(field: FieldDescriptor, type_: TypeDescriptor) -> str:
    if field.name == type_.id.name:
        return ""
    if field.is_enum:
        # String-typed columns hand back the raw value rather than the enum member.
        return (
            f"{field.name}={field.enum_class}(entity.{field.name}) "
            f"if entity.{field.name} is not None else None,"
        )
    return f"{field.name}=entity.{field.name},"


# --- lookup methods ---------------------------------------------------------


@dataclass(frozen=True)
class MethodSignature:
    name: str
    params: tuple[tuple[str, str], ...]
    returns: str
    field: str
    kind: str

    @property
    def args(self) -> str:
        return ", ".join(name for name, _ in self.params)

    @property
    def typed_params(self) -> str:
        return ", ".join(f"{name}: {annotation}" for name, annotation in self.params)

    def __str__(self) -> str:
        return f"{self.name}({self.typed_params}) -> {self.returns}"


def specific_methods(type_: TypeDescriptor) -> list[MethodSignature]:
    """Finder signatures driven only by explicit lookup flags.

    ``unique_lookup`` yields ``find_by_<field>`` returning one model,
    ``range_lookup`` yields ``find_by_<field>_range`` returning a list.
    Searchable, sortable or boolean fields get nothing on their own.
    """
    model = f"{type_.entity_name}DomainModel"
    methods: list[MethodSignature] = []
    generated: set[str] = set()

    for field in unique_lookup_fields(type_):
        param = snake_case(field.name)
        name = f"find_by_{param}"
        if name not in generated:
            methods.append(MethodSignature(name, ((param, field.python_type),), model, field.name, "unique"))
            generated.add(name)

    for field in range_lookup_fields(type_):
        name = f"find_by_{snake_case(field.name)}_range"
        if name not in generated:
            params = (("start", field.python_type), ("end", field.python_type))
            methods.append(MethodSignature(name, params, f"list[{model}]", field.name, "range"))
            generated.add(name)

    return methods


def last(items: Sequence[T]) -> T | None:
    return items[-1] if items else None
