"""Generic CRUD orchestration over a :class:`Repository`.

Generated services subclass :class:`BaseGenericDomainService` and supply the
response converters. Every failure is re-raised as a :class:`ServiceError`
naming the failed stage, chained to the original error. Nothing is retried.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from domaingen.core.ports.repository import Repository
from domaingen.runtime.contracts import CreateRequest, DomainModel, QueryParams, UpdateRequest
from domaingen.runtime.errors import InvalidIDError, ServiceError
from domaingen.runtime.ids import ID
from domaingen.runtime.requests import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, ListRequest

T = TypeVar("T", bound=DomainModel)
CR = TypeVar("CR", bound=CreateRequest)
UR = TypeVar("UR", bound=UpdateRequest)
R = TypeVar("R")
LR = TypeVar("LR")
QP = TypeVar("QP", bound=QueryParams)


@dataclass(frozen=True)
class Converters(Generic[T, R, LR]):
    to_response: Callable[[T], R]
    to_list_response: Callable[[list[T], int, int, int], LR]


def _require_id(id_: ID) -> None:
    if id_.is_zero():
        raise InvalidIDError(f"invalid ID: {id_!s}")


class BaseGenericDomainService(Generic[T, CR, UR, R, LR, QP]):
    def __init__(self, repo: Repository[T], conv: Converters[T, R, LR]) -> None:
        self.repo = repo
        self.conv = conv

    async def create(self, req: CR) -> R:
        try:
            req.validate_request()
        except Exception as exc:
            raise ServiceError("validation failed", exc) from exc

        model: T = req.to_domain_model()
        try:
            created = await self.repo.create(model)
        except Exception as exc:
            raise ServiceError("failed to create", exc) from exc
        return self.conv.to_response(created)

    async def get_by_id(self, id_: ID) -> R:
        _require_id(id_)
        try:
            model = await self.repo.get_by_id(id_)
        except Exception as exc:
            raise ServiceError("failed to get by ID", exc) from exc
        return self.conv.to_response(model)

    async def update(self, id_: ID, req: UR) -> R:
        _require_id(id_)
        try:
            req.validate_request()
        except Exception as exc:
            raise ServiceError("validation failed", exc) from exc

        try:
            existing = await self.repo.get_by_id(id_)
        except Exception as exc:
            raise ServiceError("failed to get existing model", exc) from exc

        updated: T = req.apply_to_domain_model(existing)
        # The update must land on the requested entity whatever the DTO did to the id.
        updated.set_id(id_)

        try:
            result = await self.repo.update(updated)
        except Exception as exc:
            raise ServiceError("failed to update", exc) from exc
        return self.conv.to_response(result)

    async def delete(self, id_: ID) -> None:
        _require_id(id_)
        try:
            await self.repo.delete(id_)
        except Exception as exc:
            raise ServiceError("failed to delete", exc) from exc

    async def list(self, page: int = 0, size: int = 0, sort_by: str = "", order: str = "") -> LR:
        if size <= 0 or size > MAX_PAGE_SIZE:
            size = DEFAULT_PAGE_SIZE
        if page < 0:
            page = 0

        try:
            req = ListRequest(page=page, size=size, sort_by=sort_by, order=order)  # type: ignore[arg-type]
        except ValueError as exc:
            raise ServiceError("validation failed", exc) from exc

        try:
            models, total = await self.repo.list(req)
        except Exception as exc:
            raise ServiceError("failed to list", exc) from exc
        return self.conv.to_list_response(models, total, page, size)

    async def search(self, params: QP) -> LR:
        try:
            params.validate_request()
            req = params.to_search_request().with_defaults()
        except Exception as exc:
            raise ServiceError("validation failed", exc) from exc

        try:
            models, total = await self.repo.search(req)
        except Exception as exc:
            raise ServiceError("failed to search", exc) from exc
        return self.conv.to_list_response(models, total, req.page, req.size)
