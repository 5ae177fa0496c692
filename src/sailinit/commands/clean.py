"""Clean command - remove projects whose directories no longer exist."""

import typer
from rich.markup import escape

from ..errors import SailInitError
from ..pruner import Pruner
from .common import console, error, get_store, success


def clean(
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be removed"),
) -> None:
    """Remove entries for project directories that no longer exist.

    Examples:
        sailinit clean --dry-run
        sailinit clean
    """
    try:
        result = Pruner(get_store()).prune(dry_run=dry_run)
    except SailInitError as e:
        error(f"Error cleaning orphaned projects: {e}")
        raise typer.Exit(1)

    verb = "Would remove" if dry_run else "Removing"
    for entry in result.removed:
        console.print(f"{verb} orphaned project: {escape(entry.path)} (suffix {entry.suffix})")

    if dry_run:
        console.print(f"[yellow]Would clean {result.count} orphaned project(s)[/yellow]")
        return

    success(f"Cleaned {result.count} orphaned project(s)")
