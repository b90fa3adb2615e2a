"""Pagination and search requests shared by repositories and services.

``size == 0`` means "use the default"; call ``with_defaults()`` before use.
Out-of-range values are rejected when the request is constructed.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 1000

SortOrder = Literal["", "asc", "desc"]


class ListRequest(BaseModel):
    """Offset pagination, or keyset pagination when ``cursor`` is set."""

    model_config = ConfigDict(frozen=True)

    size: int = Field(default=0, ge=0, le=MAX_PAGE_SIZE)
    page: int = Field(default=0, ge=0)
    sort_by: str = ""
    order: SortOrder = ""
    cursor: str = ""

    @property
    def uses_cursor(self) -> bool:
        return self.cursor != ""

    @property
    def offset(self) -> int:
        return self.page * self.size

    def with_defaults(self) -> ListRequest:
        if self.size == 0:
            return self.model_copy(update={"size": DEFAULT_PAGE_SIZE})
        return self


class SearchRequest(BaseModel):
    """Free-text query and/or equality filters; at least one is required."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    filters: dict[str, Any] = Field(default_factory=dict)
    size: int = Field(default=0, ge=0, le=MAX_PAGE_SIZE)
    page: int = Field(default=0, ge=0)
    sort_by: str = ""
    order: SortOrder = ""

    @model_validator(mode="after")
    def _require_query_or_filters(self) -> SearchRequest:
        if not self.query and not self.filters:
            raise ValueError("either query or filters must be provided")
        return self

    @property
    def offset(self) -> int:
        return self.page * self.size

    def with_defaults(self) -> SearchRequest:
        if self.size == 0:
            return self.model_copy(update={"size": DEFAULT_PAGE_SIZE})
        return self
