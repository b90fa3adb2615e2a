"""Opaque cursors for keyset pagination.

A cursor carries the sort value of the last row on a page plus that row's id
as a tie-breaker. The token is unpadded URL-safe base64 of compact JSON
``{"id": ..., "value": ...}``; ``value`` is omitted when absent.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from domaingen.runtime.ids import Int64ID, StringID

_TOKEN = re.compile(r"[A-Za-z0-9_-]*")


class InvalidCursorError(ValueError):
    """Raised when a cursor cannot be encoded or a token cannot be decoded."""


@dataclass(frozen=True)
class Cursor:
    id: Any
    value: Any = None


@dataclass(frozen=True)
class PageInfo:
    has_next_page: bool
    end_cursor: str = ""


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (StringID, Int64ID)):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_cursor(cursor: Cursor | None) -> str:
    """Encode ``cursor`` into a URL-safe token; ``None`` encodes to ``""``."""
    if cursor is None:
        return ""
    payload: dict[str, Any] = {"id": cursor.id}
    if cursor.value is not None:
        payload["value"] = cursor.value
    try:
        text = json.dumps(payload, separators=(",", ":"), allow_nan=False, default=_json_default)
    except (TypeError, ValueError) as exc:
        raise InvalidCursorError(f"Cursor is not serializable: {exc}") from exc
    return base64.urlsafe_b64encode(text.encode()).decode().rstrip("=")


def _normalize_number(value: Any) -> Any:
    # JSON has one number type; whole floats go back to int so ids keep their kind.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def decode_cursor(token: str) -> Cursor:
    """Decode a token produced by :func:`encode_cursor`.

    Raises ``InvalidCursorError`` if the token is empty, not unpadded URL-safe
    base64, not a JSON object, or has no ``id``.
    """
    if not token:
        raise InvalidCursorError("Cursor cannot be empty")
    if not _TOKEN.fullmatch(token):
        raise InvalidCursorError(f"Invalid cursor encoding: {token!r}")
    try:
        raw = base64.urlsafe_b64decode(token + "=" * (-len(token) % 4))
    except (binascii.Error, ValueError) as exc:
        raise InvalidCursorError(f"Invalid cursor encoding: {token!r}") from exc
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidCursorError(f"Invalid cursor data: {token!r}") from exc
    if not isinstance(payload, dict):
        raise InvalidCursorError(f"Invalid cursor data: {token!r}")
    if payload.get("id") is None:
        raise InvalidCursorError("Cursor missing required id field")
    return Cursor(id=_normalize_number(payload["id"]), value=_normalize_number(payload.get("value")))


def build_page_info(items: Sequence[Any], size: int, sort_by: str = "") -> PageInfo:
    """Page info for a page fetched with ``size + 1`` rows.

    The extra row only signals that another page exists; the end cursor points
    at the last row actually returned.
    """
    has_next = len(items) > size
    page = items[:size]
    if not page:
        return PageInfo(has_next_page=False)
    last = page[-1]
    value = getattr(last, sort_by) if sort_by else None
    return PageInfo(has_next_page=has_next, end_cursor=encode_cursor(Cursor(id=last.get_id(), value=value)))
