"""Unit tests for generated source fragments."""

from __future__ import annotations

import ast
import textwrap

import pytest

from domaingen.annotations import default_field
from domaingen.core.codegen import (
    MethodSignature,
    field_predicate,
    find_by_method,
    generate_id_operation,
    generate_orm_to_domain_assignment,
    generate_search_condition,
    id_class,
    last,
    search_method,
    set_field_call,
    specific_methods,
    wrap_id,
)
from domaingen.schema import TypeDescriptor
from tests.conftest import make_field


def _field(user_type: TypeDescriptor, name: str):
    field = user_type.field_named(name)
    assert field is not None
    return field


def _parses(fragment: str) -> None:
    ast.parse(textwrap.dedent(fragment))


class TestFieldPredicate:
    def test_text_predicate_skips_empty_in_search(self, user_type: TypeDescriptor) -> None:
        code = search_method(_field(user_type, "email"), user_type)
        assert code == (
            ' ' * 16 + 'if isinstance(value, str) and value != "":\n'
            + ' ' * 16 + "    query = query.where(User.email == value)"
        )

    def test_text_predicate_matches_empty_in_find_by(self, user_type: TypeDescriptor) -> None:
        code = find_by_method(_field(user_type, "email"), user_type)
        assert code.startswith(" " * 12 + "if isinstance(value, str):")
        assert 'value != ""' not in code

    def test_enum_predicate_accepts_member_and_string(self, user_type: TypeDescriptor) -> None:
        code = field_predicate(_field(user_type, "role"), user_type, "", True)
        assert "if isinstance(value, Role):" in code
        assert 'elif isinstance(value, str) and value != "":' in code
        assert "query = query.where(User.role == Role(value))" in code
        _parses(code)

    def test_int32_predicate_checks_bounds_and_whole_floats(self, user_type: TypeDescriptor) -> None:
        code = field_predicate(_field(user_type, "age"), user_type, "", False)
        assert "not isinstance(value, bool)" in code
        assert "-2147483648 <= value <= 2147483647" in code
        assert "value.is_integer()" in code
        assert "User.age == int(value)" in code
        _parses(code)

    def test_int64_predicate_is_a_single_branch(self) -> None:
        type_ = TypeDescriptor(name="Event", id=make_field("id", "int64"), fields=(make_field("seq", "int64", default_field()),))
        code = field_predicate(type_.fields[0], type_, "", False)
        assert code.count("if ") == 1
        assert "elif" not in code

    def test_bool_and_time_predicates(self, user_type: TypeDescriptor) -> None:
        assert "isinstance(value, bool)" in field_predicate(_field(user_type, "active"), user_type, "", False)
        assert "isinstance(value, datetime)" in field_predicate(_field(user_type, "created_at"), user_type, "", False)

    def test_unsupported_type_emits_marker(self, user_type: TypeDescriptor) -> None:
        code = field_predicate(_field(user_type, "tags"), user_type, "    ", False)
        assert code.startswith("    # unsupported field type: json\n")
        assert 'raise NotImplementedError("filtering on tags (json) is not supported")' in code
        _parses(code)


class TestSearchCondition:
    def test_text_fields_use_contains(self, user_type: TypeDescriptor) -> None:
        assert generate_search_condition(_field(user_type, "name"), user_type) == (
            "predicates.append(User.name.contains(req.query))"
        )

    def test_other_fields_emit_nothing(self, user_type: TypeDescriptor) -> None:
        assert generate_search_condition(_field(user_type, "age"), user_type) == ""
        assert generate_search_condition(_field(user_type, "role"), user_type) == ""


class TestIdOperations:
    def test_get_passes_raw_value_for_int_ids(self, user_type: TypeDescriptor) -> None:
        assert generate_id_operation(user_type, "get", "id_") == "entity = await self.session.get(User, id_.value)"

    def test_string_ids_convert_with_str(self) -> None:
        type_ = TypeDescriptor(name="Doc", id=make_field("id", "str"))
        assert generate_id_operation(type_, "delete", "id_") == (
            "result = await self.session.execute(delete(Doc).where(Doc.id == str(id_)))"
        )

    def test_int64_ids_convert_with_to_int(self) -> None:
        type_ = TypeDescriptor(name="Event", id=make_field("id", "int64"))
        code = generate_id_operation(type_, "exists", "id_")
        assert "Event.id == id_.to_int()" in code
        assert code.startswith("count = await self.session.scalar(\n")

    def test_batch_delete_builds_id_list(self) -> None:
        type_ = TypeDescriptor(name="Doc", id=make_field("id", "str"))
        code = generate_id_operation(type_, "batchDelete", "ids")
        assert code.splitlines()[0] == "string_ids = [str(i) for i in ids]"
        assert code.splitlines()[1].strip() == "await self.session.execute(delete(Doc).where(Doc.id.in_(string_ids)))"

    def test_unknown_operation_is_a_comment(self, user_type: TypeDescriptor) -> None:
        assert generate_id_operation(user_type, "archive", "id_") == "# Unknown operation: archive"


class TestAssignments:
    def test_id_classes(self, user_type: TypeDescriptor) -> None:
        assert id_class(user_type) == "Int64ID"
        assert wrap_id(user_type, "entity.id") == "Int64ID(entity.id)"
        doc = TypeDescriptor(name="Doc", id=make_field("id", "uuid"))
        assert id_class(doc) == "StringID"
        assert wrap_id(doc, "entity.id") == "StringID(str(entity.id))"

    def test_orm_to_domain_assignment(self, user_type: TypeDescriptor) -> None:
        assert generate_orm_to_domain_assignment(_field(user_type, "email"), user_type) == "email=entity.email,"
        assert generate_orm_to_domain_assignment(_field(user_type, "role"), user_type) == (
            "role=Role(entity.role) if entity.role is not None else None,"
        )
        assert generate_orm_to_domain_assignment(user_type.id, user_type) == ""

    def test_set_field_call(self, user_type: TypeDescriptor) -> None:
        assert set_field_call(_field(user_type, "name"), user_type) == "name=model.name"


class TestSpecificMethods:
    def test_lookup_flags_drive_signatures(self, user_type: TypeDescriptor) -> None:
        """Test that only unique and range lookups produce finder methods."""
        methods = specific_methods(user_type)
        assert [str(m) for m in methods] == [
            "find_by_email(email: str) -> UserDomainModel",
            "find_by_created_at_range(start: datetime, end: datetime) -> list[UserDomainModel]",
        ]

    def test_entity_name_is_used_in_return_types(self, account_type: TypeDescriptor) -> None:
        assert specific_methods(account_type)[0].returns == "AccountDomainModel"

    def test_no_lookup_flags_no_methods(self) -> None:
        type_ = TypeDescriptor(
            name="Post", id=make_field("id", "int"), fields=(make_field("title", "str", default_field()),)
        )
        assert specific_methods(type_) == []

    def test_method_signature_args(self) -> None:
        method = MethodSignature("find_by_x_range", (("start", "int"), ("end", "int")), "list[X]", "x", "range")
        assert method.args == "start, end"


@pytest.mark.parametrize(("items", "expected"), [([], None), ([1], 1), ([1, 2, 3], 3)])
def test_last(items: list[int], expected: int | None) -> None:
    assert last(items) == expected
