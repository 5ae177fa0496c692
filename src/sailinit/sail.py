"""Wrappers around Docker and the project's vendor/bin/sail launcher."""

import os
import re
import subprocess
from pathlib import Path

from rich.markup import escape

from .console import debug, info
from .errors import SailInitError

COMPOSE_FILES = ["compose.yaml", "compose.yml", "docker-compose.yaml", "docker-compose.yml"]

# Tried in order against each compose file
_PHP_VERSION_PATTERNS = [
    re.compile(r"runtimes/([0-9]+\.[0-9]+)"),
    re.compile(r"sail-([0-9]+\.[0-9]+)/app"),
    re.compile(r"context: \.?/docker/([0-9]+\.[0-9]+)"),
]


class SailNotFoundError(SailInitError):
    """Raised when vendor/bin/sail is missing from a project."""

    pass


class SailCommandError(SailInitError):
    """Raised when an external command exits with a non-zero status."""

    pass


def sail_path(project_dir: Path) -> Path:
    """Return the path of the project's sail launcher."""
    return Path(project_dir) / "vendor" / "bin" / "sail"


def detect_php_version(project_dir: Path) -> str | None:
    """Detect the PHP version a project's compose file builds.

    Args:
        project_dir: Project directory

    Returns:
        Version without the dot (e.g. "84"), or None if not found

    Examples:
        ./vendor/laravel/sail/runtimes/8.3 -> 83
        image: sail-8.4/app -> 84
        context: ./docker/8.2 -> 82
    """
    for name in COMPOSE_FILES:
        try:
            content = (Path(project_dir) / name).read_text(encoding="utf-8")
        except OSError:
            continue

        for pattern in _PHP_VERSION_PATTERNS:
            match = pattern.search(content)
            if match:
                return match.group(1).replace(".", "")
    return None


def install_dependencies(project_dir: Path, php_version: str, force: bool = False) -> bool:
    """Run composer install inside a throwaway Sail composer container.

    Args:
        project_dir: Project directory
        php_version: PHP version without the dot (e.g. "84")
        force: Install even if vendor/bin/sail already exists

    Returns:
        True if composer ran, False if it was skipped

    Raises:
        SailCommandError: If docker is missing or composer fails
    """
    project_dir = Path(project_dir).resolve()
    if not force and sail_path(project_dir).exists():
        info("vendor/bin/sail already exists, skipping composer install...")
        return False

    info("Installing composer dependencies via Docker...")
    cmd = [
        "docker",
        "run",
        "--rm",
        "-u",
        f"{os.getuid()}:{os.getgid()}",
        "-v",
        f"{project_dir}:/var/www/html",
        "-w",
        "/var/www/html",
        f"laravelsail/php{php_version}-composer:latest",
        "composer",
        "install",
        "--ignore-platform-reqs",
    ]
    _run(cmd, cwd=project_dir)
    return True


def run_sail(project_dir: Path, *args: str) -> None:
    """Run the project's sail launcher with arguments.

    Args:
        project_dir: Project directory
        *args: Arguments for sail (e.g. "up", "-d")

    Raises:
        SailNotFoundError: If vendor/bin/sail does not exist
        SailCommandError: If sail exits with a non-zero status
    """
    path = sail_path(project_dir)
    if not path.exists():
        raise SailNotFoundError(f"sail binary not found at {path}")
    _run([str(path), *args], cwd=Path(project_dir))


def container_status(project_dir: Path) -> int | None:
    """Count the running containers of a project.

    Args:
        project_dir: Project directory

    Returns:
        Number of running containers, None if the project has no sail
        launcher

    Raises:
        SailCommandError: If sail ps could not be run
    """
    path = sail_path(project_dir)
    if not path.exists():
        return None

    debug(escape(f"Running {path} ps in {project_dir}"))
    try:
        result = subprocess.run(
            [str(path), "ps", "--format", "{{.State}}"],
            cwd=project_dir,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (subprocess.SubprocessError, OSError) as e:
        raise SailCommandError(f"sail ps failed: {e}") from e
    if result.returncode != 0:
        raise SailCommandError(f"sail ps exited with status {result.returncode}")

    return sum(1 for line in result.stdout.splitlines() if line.strip() == "running")


def _run(cmd: list[str], cwd: Path) -> None:
    """Run a command with inherited stdout/stderr."""
    debug(escape(f"Running: {' '.join(cmd)}"))
    try:
        result = subprocess.run(cmd, cwd=cwd)
    except OSError as e:
        raise SailCommandError(f"cannot run {cmd[0]}: {e}") from e
    if result.returncode != 0:
        raise SailCommandError(f"{cmd[0]} exited with status {result.returncode}")
