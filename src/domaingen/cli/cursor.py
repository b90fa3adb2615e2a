import json
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from domaingen.runtime.cursor import Cursor, InvalidCursorError, decode_cursor, encode_cursor

cursor_app = typer.Typer(help="Encode and decode pagination cursors.")
console = Console()


def _parse_scalar(raw: str) -> Any:
    # Accept JSON literals so numeric ids round-trip as numbers.
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@cursor_app.command("encode")
def encode(
    id_: Annotated[str, typer.Argument(metavar="ID", help="Id of the last row on the page.")],
    value: Annotated[str | None, typer.Option(help="Sort value of the last row.")] = None,
) -> None:
    """Encode an id and optional sort value into a cursor token."""
    cursor = Cursor(id=_parse_scalar(id_), value=_parse_scalar(value) if value is not None else None)
    try:
        token = encode_cursor(cursor)
    except InvalidCursorError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
    console.print(token, soft_wrap=True)


@cursor_app.command("decode")
def decode(
    token: Annotated[str, typer.Argument(help="Cursor token.")],
) -> None:
    """Decode a cursor token."""
    try:
        cursor = decode_cursor(token)
    except InvalidCursorError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
    console.print(f"id: {escape(repr(cursor.id))}")
    if cursor.value is not None:
        console.print(f"value: {escape(repr(cursor.value))}")
