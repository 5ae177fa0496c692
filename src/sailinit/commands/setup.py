"""Setup command - assign ports, configure .env and start Sail."""

from pathlib import Path

import typer
from rich.markup import escape

from ..allocator import SuffixAllocator
from ..config import DEFAULT_PHP_VERSION, DEFAULT_START_SUFFIX
from ..envfile import setup_env
from ..errors import CollisionError, PortRangeError, SailInitError
from ..ports import check_ports_for_suffix, derive_ports, validate_suffix
from ..sail import detect_php_version, install_dependencies, run_sail
from .common import error, get_store, header, info, success, warning


def setup(
    php_version: str | None = typer.Argument(
        None, help="PHP version without the dot (e.g. 84). Detected if omitted."
    ),
    fresh: bool = typer.Option(
        False, "--fresh", help="Re-run composer install even if vendor/bin/sail exists"
    ),
    reset_db: bool = typer.Option(
        False, "--reset-db", help="Reset database settings to Sail defaults"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Show what would happen without making changes"
    ),
) -> None:
    """Assign a port suffix to the current project and start Sail.

    Examples:
        sailinit setup
        sailinit setup 83
        sailinit setup --dry-run
    """
    project_dir = Path.cwd()
    php_version = _resolve_php_version(project_dir, php_version)

    header(f"Starting Laravel Sail setup for PHP {php_version}...")

    allocator = SuffixAllocator(get_store())
    try:
        suggestion = allocator.suggest(project_dir)
    except SailInitError as e:
        error(f"Error determining suffix: {e}")
        raise typer.Exit(1)

    suggested = suggestion.suffix
    if not suggestion.registry_existed and not suggestion.existing:
        info("First-ever setup detected.")
        suggested = _prompt_start_suffix()

    if suggestion.existing:
        info(f"Detected existing port suffix: {suggested}")

    try:
        suffix = _confirm_suffix(allocator, project_dir, suggested)
    except SailInitError as e:
        error(f"Error checking suffix: {e}")
        raise typer.Exit(1)

    busy = check_ports_for_suffix(suffix)
    if busy:
        warning("Warning: The following ports are already in use:")
        for bp in busy:
            warning(f"  {bp.name}: {bp.port}")
        if not typer.confirm("Continue anyway?", default=False):
            raise typer.Exit(0)

    ports = derive_ports(suffix)

    if dry_run:
        info(escape(f"[dry-run] Would save suffix {suffix} for project {project_dir}"))
    else:
        try:
            allocator.save_project_suffix(project_dir, suffix)
        except SailInitError as e:
            error(f"Error saving suffix: {e}")
            raise typer.Exit(1)

    info(f"Using port suffix: {suffix}")

    if dry_run:
        info(escape(f"[dry-run] Would configure .env with suffix {suffix}"))
        for key, port in ports.items():
            info(escape(f"[dry-run]   {key}={port}"))
        info(escape(f"[dry-run] Would run composer install via Docker (PHP {php_version})"))
        info(escape("[dry-run] Would run sail up -d"))
        return

    try:
        if setup_env(project_dir, suffix, reset_db=reset_db):
            info("Created .env")
        info("Updated .env configuration")
    except OSError as e:
        error(f"Error setting up .env: {e}")
        raise typer.Exit(1)

    try:
        install_dependencies(project_dir, php_version, force=fresh)
        info("Starting Laravel Sail (sail up -d)...")
        run_sail(project_dir, "up", "-d")
    except SailInitError as e:
        error(str(e))
        raise typer.Exit(1)

    success("\nSetup complete! Your application is running with the following ports:")
    info(f"Main App: http://localhost:{ports['APP_PORT']}")
    info(f"Mailpit Dashboard: http://localhost:{ports['FORWARD_MAILPIT_DASHBOARD_PORT']}")


def _resolve_php_version(project_dir: Path, requested: str | None) -> str:
    """Pick the PHP version, confirming when it disagrees with compose."""
    detected = detect_php_version(project_dir)

    if requested:
        if detected and requested != detected:
            warning(
                f"Warning: Manually specified PHP version ({requested}) differs from "
                f"detected version in compose file ({detected})."
            )
            if not typer.confirm("Continue anyway?", default=False):
                raise typer.Exit(0)
        return requested

    if detected:
        info(f"Detected PHP version: {detected}")
        return detected

    info(f"No PHP version detected. Using default: {DEFAULT_PHP_VERSION}")
    return DEFAULT_PHP_VERSION


def _parse_suffix(raw: str) -> int | None:
    """Parse and range-check typed input, printing why it was rejected."""
    try:
        value = int(raw)
    except ValueError:
        error("Invalid suffix. Please enter a number.")
        return None

    try:
        validate_suffix(value)
    except PortRangeError as e:
        error(f"Invalid suffix: {e}")
        return None
    return value


def _prompt_start_suffix() -> int:
    """Ask for the first suffix ever handed out on this host."""
    while True:
        raw = typer.prompt(
            f"Enter the starting port suffix for your projects [default {DEFAULT_START_SUFFIX}]",
            default="",
            show_default=False,
        ).strip()
        if not raw:
            return DEFAULT_START_SUFFIX
        value = _parse_suffix(raw)
        if value is not None:
            return value


def _confirm_suffix(allocator: SuffixAllocator, project_dir: Path, suggested: int) -> int:
    """Loop until the user accepts a suffix that is in range and unclaimed.

    A collision on an accepted (not typed) suffix falls back to the
    original suggestion for the next round.
    """
    suffix = suggested
    while True:
        raw = typer.prompt(
            f"Use suffix [{suffix}]? (Press Enter to confirm, or type new suffix)",
            default="",
            show_default=False,
        ).strip()

        if raw:
            value = _parse_suffix(raw)
            if value is None:
                continue
            suffix = value

        try:
            allocator.check(project_dir, suffix)
        except CollisionError as e:
            error(escape(str(e)))
            if not raw:
                suffix = suggested
            continue
        except PortRangeError as e:
            error(f"Invalid suffix: {e}")
            suffix = suggested
            continue

        return suffix
