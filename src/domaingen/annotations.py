"""Declarative per-field annotations consumed by the code generator.

Scopes only control which generated request/response shape a field appears
in. Services and repositories always operate on the full domain model.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class FieldScope(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    QUERY = "query"
    RESPONSE = "response"


ALL_FIELD_SCOPES: tuple[FieldScope, ...] = (
    FieldScope.CREATE,
    FieldScope.UPDATE,
    FieldScope.QUERY,
    FieldScope.RESPONSE,
)


class FieldMetadata(BaseModel):
    """Documentation metadata reserved for API spec generation.

    Stored alongside the annotation but never read by the code generator.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    format: str = ""
    pattern: str = ""
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    enum: list[Any] | None = None
    read_only: bool = Field(default=False, alias="readOnly")
    write_only: bool = Field(default=False, alias="writeOnly")
    deprecated: bool = False
    tags: list[str] | None = None


class DomainField(BaseModel):
    """Field annotation stored under :attr:`NAME` in a field's annotation bag.

    Every builder method returns a modified copy; instances are immutable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    NAME: ClassVar[str] = "DomainField"

    scopes: tuple[FieldScope, ...] = ()
    required: dict[FieldScope, bool] = Field(default_factory=dict)
    validation: dict[str, Any] | None = None
    description: str = ""
    example: Any = None
    sensitive: bool = False
    searchable: bool = False
    sortable: bool = False
    filterable: bool = False
    unique_lookup: bool = False
    range_lookup: bool = False
    metadata: FieldMetadata | None = None

    def to_map(self) -> dict[str, Any]:
        """Return the canonical JSON-compatible form used in serialized schemas."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)

    def with_required(self, scope: FieldScope) -> DomainField:
        return self.model_copy(update={"required": {**self.required, scope: True}})

    def with_validation(self, rules: dict[str, Any]) -> DomainField:
        return self.model_copy(update={"validation": dict(rules)})

    def with_description(self, description: str) -> DomainField:
        return self.model_copy(update={"description": description})

    def with_example(self, example: Any) -> DomainField:
        return self.model_copy(update={"example": example})

    def as_sensitive(self) -> DomainField:
        return self.model_copy(update={"sensitive": True})

    def as_searchable(self) -> DomainField:
        return self.model_copy(update={"searchable": True})

    def as_sortable(self) -> DomainField:
        return self.model_copy(update={"sortable": True})

    def as_filterable(self) -> DomainField:
        return self.model_copy(update={"filterable": True})

    def as_unique_lookup(self) -> DomainField:
        """Generate a ``find_by_<field>`` method returning a single result."""
        return self.model_copy(update={"unique_lookup": True})

    def as_range_lookup(self) -> DomainField:
        """Generate a ``find_by_<field>_range`` method for time or numeric fields."""
        return self.model_copy(update={"range_lookup": True})

    # --- metadata -----------------------------------------------------------

    def _with_metadata(self, **updates: Any) -> DomainField:
        current = self.metadata or FieldMetadata()
        return self.model_copy(update={"metadata": current.model_copy(update=updates)})

    def with_metadata(self, metadata: FieldMetadata) -> DomainField:
        return self.model_copy(update={"metadata": metadata})

    def with_title(self, title: str) -> DomainField:
        return self._with_metadata(title=title)

    def with_format(self, fmt: str) -> DomainField:
        return self._with_metadata(format=fmt)

    def with_pattern(self, pattern: str) -> DomainField:
        return self._with_metadata(pattern=pattern)

    def with_range(self, minimum: float | None, maximum: float | None) -> DomainField:
        return self._with_metadata(minimum=minimum, maximum=maximum)

    def with_length(self, min_length: int | None, max_length: int | None) -> DomainField:
        return self._with_metadata(min_length=min_length, max_length=max_length)

    def with_enum(self, *values: Any) -> DomainField:
        return self._with_metadata(enum=list(values))

    def as_read_only(self) -> DomainField:
        return self._with_metadata(read_only=True)

    def as_write_only(self) -> DomainField:
        return self._with_metadata(write_only=True)

    def as_deprecated(self) -> DomainField:
        return self._with_metadata(deprecated=True)

    def with_tags(self, *tags: str) -> DomainField:
        return self._with_metadata(tags=list(tags))


class DomainConfig(BaseModel):
    """Entity-level annotation. ``entity_name`` overrides the schema name."""

    model_config = ConfigDict(frozen=True)

    NAME: ClassVar[str] = "DomainConfig"

    entity_name: str = ""

    def to_map(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_defaults=True)


# --- builders ---------------------------------------------------------------


def new_domain_field() -> DomainField:
    return DomainField()


def domain_field_with_scopes(*scopes: FieldScope) -> DomainField:
    return DomainField(scopes=scopes)


def default_field() -> DomainField:
    """Regular business field: every scope, searchable, filterable and sortable."""
    return DomainField(scopes=ALL_FIELD_SCOPES).as_searchable().as_filterable().as_sortable()


def input_only_field() -> DomainField:
    """Accepted on create/update but never returned, e.g. passwords."""
    return DomainField(scopes=(FieldScope.CREATE, FieldScope.UPDATE), sensitive=True)


def output_only_field() -> DomainField:
    """System-managed field: queryable and returned, never set over HTTP."""
    return (
        DomainField(scopes=(FieldScope.QUERY, FieldScope.RESPONSE)).as_searchable().as_filterable().as_sortable()
    )


def create_only_field() -> DomainField:
    """Write-once field such as a creator id or foreign key."""
    return (
        DomainField(scopes=(FieldScope.CREATE, FieldScope.QUERY, FieldScope.RESPONSE))
        .as_searchable()
        .as_filterable()
        .as_sortable()
    )


def id_field() -> DomainField:
    return output_only_field().with_description("Unique entity identifier").as_read_only()


def audit_log_field() -> DomainField:
    return output_only_field().as_read_only()
