"""Shared fixtures and helpers for tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from domaingen.annotations import (
    DomainConfig,
    DomainField,
    FieldScope,
    audit_log_field,
    default_field,
    id_field,
    input_only_field,
)
from domaingen.config import GeneratorConfig
from domaingen.schema import FieldDescriptor, TypeDescriptor

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


def make_field(name: str, type_name: str, annotation: DomainField | None = None, **kwargs: object) -> FieldDescriptor:
    annotations = {DomainField.NAME: annotation} if annotation is not None else {}
    return FieldDescriptor(name=name, type_name=type_name, annotations=annotations, **kwargs)  # type: ignore[arg-type]


@pytest.fixture
def user_type() -> TypeDescriptor:
    """A typical user entity: int id, unique email, enum role, audited timestamps."""
    return TypeDescriptor(
        name="User",
        id=make_field("id", "int", id_field()),
        fields=(
            make_field("email", "str", default_field().as_unique_lookup().with_required(FieldScope.CREATE), unique=True),
            make_field("name", "str", default_field().with_description("Display name")),
            make_field("password", "str", input_only_field().with_required(FieldScope.CREATE)),
            make_field("role", "enum", default_field(), enum_type="Role", has_default=True),
            make_field("age", "int32", default_field(), nillable=True),
            make_field("active", "bool", default_field(), has_default=True),
            make_field("created_at", "datetime", audit_log_field().as_range_lookup(), immutable=True, has_default=True),
            make_field("tags", "json", default_field(), nillable=True),
            make_field("internal_note", "str"),
        ),
    )


@pytest.fixture
def account_type(user_type: TypeDescriptor) -> TypeDescriptor:
    """The user entity renamed through an entity-level annotation."""
    return TypeDescriptor(
        name=user_type.name,
        id=user_type.id,
        fields=user_type.fields,
        annotations={DomainConfig.NAME: DomainConfig(entity_name="Account")},
    )


@pytest.fixture
def generator_config(tmp_path: Path) -> GeneratorConfig:
    return GeneratorConfig(output_dir=tmp_path, package_name="domain", orm_module="app.models")
