"""Structural contracts the generic service expects from generated types."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, TypeVar

from domaingen.runtime.errors import EntityValidationError
from domaingen.runtime.ids import ID
from domaingen.runtime.requests import SearchRequest

Self_ = TypeVar("Self_", bound="DomainModel")


class DomainModel(Protocol):
    def get_id(self) -> ID: ...

    def set_id(self, id_: ID) -> None: ...

    def clone(self: Self_) -> Self_: ...


class CreateRequest(Protocol):
    def validate_request(self) -> None: ...

    def to_domain_model(self) -> Any: ...


class UpdateRequest(Protocol):
    def validate_request(self) -> None: ...

    def to_domain_model(self) -> Any: ...

    def apply_to_domain_model(self, model: Any) -> Any: ...


class QueryParams(Protocol):
    def validate_request(self) -> None: ...

    def to_search_request(self) -> SearchRequest: ...


def check_required(obj: object, names: Iterable[str]) -> None:
    """Raise ``EntityValidationError`` naming every unset or empty field."""
    missing = [name for name in names if getattr(obj, name, None) in (None, "")]
    if missing:
        raise EntityValidationError(f"missing required fields: {', '.join(missing)}")
