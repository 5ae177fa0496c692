"""Stop and down commands - control the current project's Sail services."""

from pathlib import Path

import typer

from ..errors import SailInitError
from ..sail import run_sail
from .common import error, info


def stop() -> None:
    """Run sail stop in the current project."""
    _run_sail_command("stop", "Stopping Laravel Sail...")


def down() -> None:
    """Run sail down in the current project."""
    _run_sail_command("down", "Running sail down...")


def _run_sail_command(command: str, message: str) -> None:
    info(message)
    try:
        run_sail(Path.cwd(), command)
    except SailInitError as e:
        error(f"Error running sail {command}: {e}")
        raise typer.Exit(1)
