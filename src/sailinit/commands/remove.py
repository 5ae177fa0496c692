"""Remove command - drop a project from the port registry."""

from pathlib import Path

import typer

from ..errors import SailInitError
from ..pruner import Pruner
from .common import error, get_store, success


def remove(
    path: Path | None = typer.Argument(
        None, help="Project directory (defaults to the current directory)"
    ),
) -> None:
    """Remove the current project from the port registry.

    Examples:
        sailinit remove
        sailinit remove ../old-project
    """
    project_dir = path or Path.cwd()

    try:
        suffix = Pruner(get_store()).remove_project(project_dir)
    except SailInitError as e:
        error(f"Error removing project: {e}")
        raise typer.Exit(1)

    success(f"Project removed from port registry (suffix {suffix}).")
