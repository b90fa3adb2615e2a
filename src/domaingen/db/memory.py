"""Dictionary-backed :class:`Repository` for tests and prototyping.

Models are cloned on the way in and on the way out, so callers never share
state with the store.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from domaingen.runtime.contracts import DomainModel
from domaingen.runtime.cursor import decode_cursor
from domaingen.runtime.errors import EntityAlreadyExistsError, EntityNotFoundError, EntityValidationError
from domaingen.runtime.ids import ID, Int64ID, StringID
from domaingen.runtime.requests import ListRequest, SearchRequest

T = TypeVar("T", bound=DomainModel)


def _plain(value: Any) -> Any:
    """Reduce a value to what a cursor token would carry for it."""
    if isinstance(value, (StringID, Int64ID)):
        return value.value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _sort_key(value: Any) -> tuple[bool, Any]:
    plain = _plain(value)
    return (plain is None, plain if plain is not None else 0)


class InMemoryRepository(Generic[T]):
    def __init__(self, id_factory: Callable[[int], ID] | None = None) -> None:
        self.items: dict[ID, T] = {}
        self._id_factory: Callable[[int], ID] = id_factory or Int64ID
        self._next_id = 1

    def _assign_id(self, model: T) -> T:
        stored = model.clone()
        if stored.get_id().is_zero():
            stored.set_id(self._id_factory(self._next_id))
            self._next_id += 1
        return stored

    def _require(self, id_: ID) -> T:
        model = self.items.get(id_)
        if model is None:
            raise EntityNotFoundError(f"entity {id_} not found")
        return model

    async def create(self, model: T) -> T:
        stored = self._assign_id(model)
        id_ = stored.get_id()
        if id_ in self.items:
            raise EntityAlreadyExistsError(f"entity {id_} already exists")
        self.items[id_] = stored
        return stored.clone()

    async def get_by_id(self, id_: ID) -> T:
        return self._require(id_).clone()

    async def update(self, model: T) -> T:
        id_ = model.get_id()
        self._require(id_)
        self.items[id_] = model.clone()
        return model.clone()

    async def delete(self, id_: ID) -> None:
        self._require(id_)
        del self.items[id_]

    async def create_batch(self, models: Sequence[T]) -> list[T]:
        created: list[T] = []
        for model in models:
            created.append(await self.create(model))
        return created

    async def update_batch(self, models: Sequence[T]) -> list[T]:
        for model in models:
            self._require(model.get_id())
        return [await self.update(model) for model in models]

    async def delete_batch(self, ids: Sequence[ID]) -> None:
        for id_ in ids:
            self._require(id_)
        for id_ in ids:
            self.items.pop(id_, None)

    def _ordered(self, rows: list[T], sort_by: str, order: str) -> list[T]:
        return sorted(rows, key=lambda row: self._position(row, sort_by), reverse=order == "desc")

    async def list(self, req: ListRequest) -> tuple[list[T], int]:
        """Return a page of models and the total count.

        With ``req.cursor`` set, rows strictly after the cursor position are
        returned and up to ``size + 1`` rows come back, so the caller can pass
        them straight to ``build_page_info``.
        """
        req = req.with_defaults()
        if req.sort_by and any(not hasattr(row, req.sort_by) for row in self.items.values()):
            raise EntityValidationError(f"unknown sort field: {req.sort_by}")

        rows = self._ordered(list(self.items.values()), req.sort_by, req.order)
        total = len(rows)

        if req.uses_cursor:
            cursor = decode_cursor(req.cursor)
            position = (_sort_key(cursor.value if req.sort_by else None), _sort_key(cursor.id))
            if req.order == "desc":
                rows = [r for r in rows if self._position(r, req.sort_by) < position]
            else:
                rows = [r for r in rows if self._position(r, req.sort_by) > position]
            return [r.clone() for r in rows[: req.size + 1]], total

        return [r.clone() for r in rows[req.offset : req.offset + req.size]], total

    @staticmethod
    def _position(row: Any, sort_by: str) -> tuple[Any, ...]:
        value = getattr(row, sort_by) if sort_by else None
        return (_sort_key(value), _sort_key(row.get_id()))

    def _matches(self, row: T, req: SearchRequest) -> bool:
        for name, expected in req.filters.items():
            if not hasattr(row, name):
                raise EntityValidationError(f"unknown filter field: {name}")
            if _plain(getattr(row, name)) != _plain(expected):
                return False
        if req.query:
            texts = [v for k, v in vars(row).items() if k != "id" and isinstance(v, str)]
            return any(req.query in text for text in texts)
        return True

    async def search(self, req: SearchRequest) -> tuple[list[T], int]:
        req = req.with_defaults()
        rows = [row for row in self.items.values() if self._matches(row, req)]
        rows = self._ordered(rows, req.sort_by, req.order)
        return [r.clone() for r in rows[req.offset : req.offset + req.size]], len(rows)

    async def count(self, req: SearchRequest) -> int:
        return sum(1 for row in self.items.values() if self._matches(row, req))

    async def exists(self, id_: ID) -> bool:
        return id_ in self.items

    async def find_by(self, field: str, value: Any) -> list[T]:
        return [
            row.clone()
            for row in self._ordered(list(self.items.values()), "", "")
            if hasattr(row, field) and _plain(getattr(row, field)) == _plain(value)
        ]

    async def find_one_by(self, field: str, value: Any) -> T:
        rows = await self.find_by(field, value)
        if not rows:
            raise EntityNotFoundError(f"no entity with {field} = {value!r}")
        return rows[0]
