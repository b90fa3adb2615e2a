"""Unit tests for the generic domain service."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from typing import Any
from unittest.mock import AsyncMock

import pytest
from pydantic import BaseModel

from domaingen.runtime.contracts import check_required
from domaingen.runtime.errors import (
    EntityNotFoundError,
    EntityValidationError,
    InvalidIDError,
    ServiceError,
    is_not_found,
    is_validation,
)
from domaingen.runtime.ids import ID, Int64ID, StringID
from domaingen.runtime.requests import ListRequest, SearchRequest
from domaingen.runtime.service import BaseGenericDomainService, Converters


@dataclass
class Note:
    id: ID = Int64ID()
    title: str | None = None
    body: str | None = None

    def get_id(self) -> ID:
        return self.id

    def set_id(self, id_: ID) -> None:
        self.id = id_

    def clone(self) -> Note:
        return replace(self)


class NoteCreate(BaseModel):
    title: str | None = None
    body: str | None = None

    def validate_request(self) -> None:
        check_required(self, ["title"])

    def to_domain_model(self) -> Note:
        return Note(title=self.title, body=self.body)


class NoteUpdate(BaseModel):
    id: int | None = None
    title: str | None = None

    def validate_request(self) -> None:
        check_required(self, [])

    def to_domain_model(self) -> Note:
        return Note(title=self.title)

    def apply_to_domain_model(self, model: Note) -> Note:
        updated = model.clone()
        if self.title is not None:
            updated.title = self.title
        if self.id is not None:
            updated.id = Int64ID(self.id)
        return updated


class NoteQuery(BaseModel):
    query: str = ""
    size: int = 0

    def validate_request(self) -> None:
        pass

    def to_search_request(self) -> SearchRequest:
        return SearchRequest(query=self.query, size=self.size)


def _to_list(models: list[Note], total: int, page: int, size: int) -> dict[str, Any]:
    return {"items": models, "total": total, "page": page, "size": size}


@pytest.fixture
def repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(repo: AsyncMock) -> BaseGenericDomainService:
    return BaseGenericDomainService(repo, Converters(to_response=lambda m: m, to_list_response=_to_list))


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_from_request(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.create.return_value = Note(id=Int64ID(1), title="t")

        result = await service.create(NoteCreate(title="t"))

        assert result == Note(id=Int64ID(1), title="t")
        assert repo.create.call_args[0][0] == Note(title="t")

    @pytest.mark.asyncio
    async def test_validation_failure_never_reaches_storage(
        self, service: BaseGenericDomainService, repo: AsyncMock
    ) -> None:
        with pytest.raises(ServiceError) as exc_info:
            await service.create(NoteCreate(body="no title"))

        assert str(exc_info.value) == "validation failed: missing required fields: title"
        assert is_validation(exc_info.value)
        repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_storage_failure_is_wrapped(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.create.side_effect = RuntimeError("disk full")

        with pytest.raises(ServiceError, match="^failed to create: disk full$") as exc_info:
            await service.create(NoteCreate(title="t"))

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestGetAndDelete:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("zero", [Int64ID(), StringID()])
    async def test_zero_id_is_rejected(self, service: BaseGenericDomainService, repo: AsyncMock, zero: ID) -> None:
        with pytest.raises(InvalidIDError, match="invalid ID"):
            await service.get_by_id(zero)
        with pytest.raises(InvalidIDError):
            await service.delete(zero)
        repo.get_by_id.assert_not_called()
        repo.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found_stays_detectable(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.get_by_id.side_effect = EntityNotFoundError("Note 9 not found")

        with pytest.raises(ServiceError, match="^failed to get by ID: ") as exc_info:
            await service.get_by_id(Int64ID(9))

        assert is_not_found(exc_info.value)

    @pytest.mark.asyncio
    async def test_delete_failure_is_wrapped(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.delete.side_effect = EntityNotFoundError()

        with pytest.raises(ServiceError, match="^failed to delete: "):
            await service.delete(StringID("abc"))


class TestUpdate:
    @pytest.mark.asyncio
    async def test_missing_entity_never_calls_update(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.get_by_id.side_effect = EntityNotFoundError()

        with pytest.raises(ServiceError) as exc_info:
            await service.update(Int64ID(5), NoteUpdate(title="new"))

        assert exc_info.value.stage == "failed to get existing model"
        assert is_not_found(exc_info.value)
        repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_requested_id_wins_over_request_body(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = Note(id=Int64ID(5), title="old", body="keep")
        repo.update.side_effect = lambda model: model

        result = await service.update(Int64ID(5), NoteUpdate(id=99, title="new"))

        assert result == Note(id=Int64ID(5), title="new", body="keep")

    @pytest.mark.asyncio
    async def test_update_failure_is_wrapped(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = Note(id=Int64ID(5), title="old")
        repo.update.side_effect = EntityValidationError("title too long")

        with pytest.raises(ServiceError, match="^failed to update: title too long$"):
            await service.update(Int64ID(5), NoteUpdate(title="x"))


class TestListAndSearch:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(("size", "expected"), [(-1, 20), (0, 20), (5000, 20), (50, 50)])
    async def test_list_clamps_size(
        self, service: BaseGenericDomainService, repo: AsyncMock, size: int, expected: int
    ) -> None:
        repo.list.return_value = ([], 0)

        result = await service.list(page=-3, size=size)

        req: ListRequest = repo.list.call_args[0][0]
        assert req.size == expected
        assert req.page == 0
        assert result == {"items": [], "total": 0, "page": 0, "size": expected}

    @pytest.mark.asyncio
    async def test_list_failure_is_wrapped(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.list.side_effect = RuntimeError("timeout")

        with pytest.raises(ServiceError, match="^failed to list: timeout$"):
            await service.list()

    @pytest.mark.asyncio
    async def test_search_uses_resolved_page_size(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        notes = [Note(id=Int64ID(1), title="ada")]
        repo.search.return_value = (notes, 1)

        result = await service.search(NoteQuery(query="ada"))

        assert repo.search.call_args[0][0].size == 20
        assert result == {"items": notes, "total": 1, "page": 0, "size": 20}

    @pytest.mark.asyncio
    async def test_empty_search_fails_validation(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        with pytest.raises(ServiceError) as exc_info:
            await service.search(NoteQuery())

        assert exc_info.value.stage == "validation failed"
        repo.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_failure_is_wrapped(self, service: BaseGenericDomainService, repo: AsyncMock) -> None:
        repo.search.side_effect = RuntimeError("boom")

        with pytest.raises(ServiceError, match="^failed to search: boom$"):
            await service.search(NoteQuery(query="x"))


@pytest.mark.asyncio
async def test_cancellation_is_not_wrapped(service: BaseGenericDomainService, repo: AsyncMock) -> None:
    repo.get_by_id.side_effect = asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await service.get_by_id(Int64ID(1))
