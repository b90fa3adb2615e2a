import typer

from domaingen.cli.cursor import cursor_app
from domaingen.cli.generate import generate
from domaingen.cli.inspect import inspect_app

app = typer.Typer(
    name="domaingen",
    help="domaingen CLI: generate domain layers from annotated schemas.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("generate")(generate)
app.add_typer(inspect_app, name="inspect")
app.add_typer(cursor_app, name="cursor")


def main() -> None:
    app()
