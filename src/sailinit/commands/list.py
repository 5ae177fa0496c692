"""List command - show registered projects and their ports."""

import typer
from rich.markup import escape
from rich.table import Table

from ..errors import SailInitError
from ..pruner import Pruner
from .common import console, error, get_store, info


def list_cmd() -> None:
    """List all registered projects with their port suffixes.

    Examples:
        sailinit list
    """
    try:
        projects = Pruner(get_store()).list_projects()
    except SailInitError as e:
        error(f"Error listing projects: {e}")
        raise typer.Exit(1)

    if not projects:
        info("No registered projects found.")
        return

    table = Table(title="Registered Projects")
    table.add_column("Project", style="cyan")
    table.add_column("Suffix", style="yellow", justify="right")
    table.add_column("App Port", justify="right")
    table.add_column("DB Port", justify="right")
    table.add_column("Redis Port", justify="right")
    table.add_column("Vite Port", justify="right")
    table.add_column("Status")

    for p in projects:
        ports = p.ports
        table.add_row(
            escape(p.path),
            str(p.suffix),
            str(ports["APP_PORT"]),
            str(ports["FORWARD_DB_PORT"]),
            str(ports["FORWARD_REDIS_PORT"]),
            str(ports["VITE_PORT"]),
            "[green]OK[/green]" if p.exists else "[red]✗ Missing[/red]",
        )

    console.print(table)
