"""Typer CLI for sailinit - Main entry point."""

import typer

from . import __version__
from .commands import clean, down, list_cmd, remove, setup, status, stop

app = typer.Typer(
    name="sailinit",
    help="Per-project port assignment and setup for Laravel Sail",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sailinit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Per-project port assignment and setup for Laravel Sail."""
    pass

# Register all commands
app.command()(setup)
app.command(name="list")(list_cmd)
app.command()(status)
app.command()(clean)
app.command()(remove)
app.command()(stop)
app.command()(down)


def main() -> None:
    """Main entry point."""
    app()
