"""Status command - show container status of registered projects."""

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from ..errors import SailInitError
from ..pruner import Pruner
from ..sail import container_status
from .common import console, debug, error, get_store, info


def status() -> None:
    """Show status of all registered projects.

    Examples:
        sailinit status
    """
    try:
        projects = Pruner(get_store()).list_projects()
    except SailInitError as e:
        error(f"Error showing status: {e}")
        raise typer.Exit(1)

    if not projects:
        info("No registered projects found.")
        return

    table = Table(title="Project Status")
    table.add_column("Project", style="cyan")
    table.add_column("Suffix", style="yellow", justify="right")
    table.add_column("App Port", justify="right")
    table.add_column("Containers")

    for p in projects:
        table.add_row(
            escape(p.path),
            str(p.suffix),
            str(p.ports["APP_PORT"]),
            _describe_containers(Path(p.path)) if p.exists else "[red]✗ Missing[/red]",
        )

    console.print(table)


def _describe_containers(project_dir: Path) -> str:
    try:
        running = container_status(project_dir)
    except SailInitError as e:
        debug(escape(f"{project_dir}: {e}"))
        return "unknown"

    if running is None:
        return "[dim]no sail[/dim]"
    if running == 0:
        return "[dim]stopped[/dim]"
    return f"[green]{running} running[/green]"
