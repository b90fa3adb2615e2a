import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from domaingen.config import GeneratorConfig
from domaingen.render import generate as _generate
from domaingen.schema import load_source

console = Console()


def generate(
    schema: Annotated[str, typer.Argument(help="Schema JSON file or importable module of SQLAlchemy models.")],
    output_dir: Annotated[Path | None, typer.Option(help="Directory for generated modules.")] = None,
    orm_module: Annotated[str | None, typer.Option(help="Import path of the ORM classes and enums.")] = None,
    runtime_package: Annotated[str | None, typer.Option(help="Import path of the domaingen runtime.")] = None,
    repository: Annotated[bool, typer.Option(help="Generate repository modules.")] = True,
    service: Annotated[bool, typer.Option(help="Generate service modules.")] = True,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each generated file.")] = False,
) -> None:
    """Generate domain model, repository and service modules."""
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    config = GeneratorConfig.from_env()
    overrides: dict[str, object] = {}
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if orm_module is not None:
        overrides["orm_module"] = orm_module
    if runtime_package is not None:
        overrides["runtime_package"] = runtime_package
    if not repository:
        overrides["generate_repository"] = False
    if not service:
        overrides["generate_service"] = False
    config = config.model_copy(update=overrides)

    try:
        types = load_source(schema)
    except (OSError, ImportError, ValueError) as exc:
        console.print(f"[red]Could not load schema {schema}: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    if not types:
        console.print(f"[yellow]No types found in {schema}.[/yellow]")
        raise typer.Exit(1)

    written = _generate(types, config)
    for path in written:
        console.print(f"[green]Generated[/green] {path}")
    console.print(f"({len(written)} files)")
