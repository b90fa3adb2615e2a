"""Entity identifiers: a closed pair of string- and int64-backed IDs."""

from __future__ import annotations

import re
from dataclasses import dataclass

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class StringID:
    value: str = ""

    def __str__(self) -> str:
        return self.value

    def is_zero(self) -> bool:
        return self.value == ""

    def to_int(self) -> int:
        """Parse the id as a base-10 int64; raises ``ValueError`` otherwise."""
        if not _DECIMAL.fullmatch(self.value):
            raise ValueError(f"id {self.value!r} is not a decimal integer")
        parsed = int(self.value, 10)
        if not INT64_MIN <= parsed <= INT64_MAX:
            raise ValueError(f"id {self.value!r} is out of int64 range")
        return parsed


@dataclass(frozen=True)
class Int64ID:
    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Int64ID requires an int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"id {self.value} is out of int64 range")

    def __str__(self) -> str:
        return str(self.value)

    def is_zero(self) -> bool:
        return self.value == 0

    def to_int(self) -> int:
        return self.value


ID = StringID | Int64ID


def new_id_from_string(value: str) -> ID:
    return StringID(value)


def new_id_from_int64(value: int) -> ID:
    return Int64ID(value)
