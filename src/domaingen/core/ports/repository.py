from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from domaingen.runtime.ids import ID
from domaingen.runtime.requests import ListRequest, SearchRequest

T = TypeVar("T")


class Repository(Protocol[T]):
    async def create(self, model: T) -> T: ...

    async def get_by_id(self, id_: ID) -> T: ...

    async def update(self, model: T) -> T: ...

    async def delete(self, id_: ID) -> None: ...

    async def create_batch(self, models: Sequence[T]) -> list[T]: ...

    async def update_batch(self, models: Sequence[T]) -> list[T]: ...

    async def delete_batch(self, ids: Sequence[ID]) -> None: ...

    async def list(self, req: ListRequest) -> tuple[list[T], int]: ...

    async def search(self, req: SearchRequest) -> tuple[list[T], int]: ...

    async def count(self, req: SearchRequest) -> int: ...

    async def exists(self, id_: ID) -> bool: ...

    async def find_by(self, field: str, value: Any) -> list[T]: ...

    async def find_one_by(self, field: str, value: Any) -> T: ...
