from collections.abc import Sequence
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from domaingen.core.codegen import specific_methods
from domaingen.core.fields import (
    create_fields,
    query_fields,
    response_fields,
    searchable_fields,
    sortable_fields,
    update_fields,
)
from domaingen.core.resolver import get_domain_field
from domaingen.schema import TypeDescriptor, load_source

inspect_app = typer.Typer(help="Inspect how annotations drive generation.")
console = Console()


def _render_table(title: str, headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(title=title, show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(escape(str(v)) for v in row))
    console.print(table)


def _load(schema: str) -> list[TypeDescriptor]:
    try:
        return load_source(schema)
    except (OSError, ImportError, ValueError) as exc:
        console.print(f"[red]Could not load schema {schema}: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc


def _mark(flag: bool) -> str:
    return "x" if flag else ""


@inspect_app.command("fields")
def fields(
    schema: Annotated[str, typer.Argument(help="Schema JSON file or importable module.")],
) -> None:
    """Show which generated shapes each field takes part in."""
    for type_ in _load(schema):
        selections = {
            "create": {f.name for f in create_fields(type_)},
            "update": {f.name for f in update_fields(type_)},
            "query": {f.name for f in query_fields(type_)},
            "response": {f.name for f in response_fields(type_)},
            "search": {f.name for f in searchable_fields(type_)},
            "sort": {f.name for f in sortable_fields(type_)},
        }
        rows = []
        for f in type_.fields:
            annotated = get_domain_field(f) is not None
            rows.append(
                (f.name, f.type_name, _mark(annotated), *(_mark(f.name in names) for names in selections.values()))
            )
        _render_table(type_.entity_name, ["field", "type", "annotated", *selections], rows)


@inspect_app.command("methods")
def methods(
    schema: Annotated[str, typer.Argument(help="Schema JSON file or importable module.")],
) -> None:
    """List the lookup methods generated for each type."""
    rows = [(type_.entity_name, str(m)) for type_ in _load(schema) for m in specific_methods(type_)]
    _render_table("lookup methods", ["type", "signature"], rows)
    console.print(f"({len(rows)} methods)")
