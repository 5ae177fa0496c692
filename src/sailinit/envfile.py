"""Reading and rewriting a project's .env file."""

import re
from collections.abc import Iterable
from pathlib import Path

from .ports import APP_PORT_BASE, derive_ports, env_key

ENV_FILENAME = ".env"
ENV_EXAMPLE_FILENAME = ".env.example"

XDEBUG_KEY = "SAIL_XDEBUG_MODE"
XDEBUG_VALUE = "develop,debug,coverage"

# Sail database defaults, applied to new files or on --reset-db
DB_DEFAULTS: dict[str, str] = {
    "DB_CONNECTION": "mysql",
    "DB_HOST": "mysql",
    "DB_PORT": "3306",
    "DB_DATABASE": "laravel",
    "DB_USERNAME": "sail",
    "DB_PASSWORD": "password",
}

_APP_PORT_RE = re.compile(rf"^{env_key('APP')}=([+-]?\d+)")


def recover_suffix_from_env_text(lines: Iterable[str]) -> int | None:
    """Recover a port suffix from the APP_PORT line of a .env file.

    The first APP_PORT line carrying a port at or above the APP base wins.
    Lines with a smaller port are skipped.

    Args:
        lines: Raw .env lines

    Returns:
        Recovered suffix, or None if nothing usable was found
    """
    for line in lines:
        match = _APP_PORT_RE.match(line.strip())
        if match:
            port = int(match.group(1))
            if port >= APP_PORT_BASE:
                return port - APP_PORT_BASE
    return None


def read_env_lines(project_dir: Path) -> list[str] | None:
    """Read the project's .env file as lines.

    Returns:
        List of lines, or None if the file is missing or unreadable
    """
    try:
        return _read_lines(Path(project_dir) / ENV_FILENAME)
    except OSError:
        return None


def setup_env(project_dir: Path, suffix: int, reset_db: bool = False) -> bool:
    """Write the port assignments for a suffix into the project's .env.

    Creates .env from .env.example (or empty) when missing. Existing port
    and xdebug lines are dropped and re-appended at the end as one block.
    Database defaults are applied only to a freshly created file or when
    reset_db is set.

    Args:
        project_dir: Project directory
        suffix: Confirmed port suffix
        reset_db: Force the Sail database defaults

    Returns:
        True if .env was created, False if it already existed
    """
    project_dir = Path(project_dir)
    env_path = project_dir / ENV_FILENAME
    example_path = project_dir / ENV_EXAMPLE_FILENAME

    created = not env_path.exists()
    if created:
        if example_path.exists():
            env_path.write_bytes(example_path.read_bytes())
        else:
            env_path.write_bytes(b"")

    lines = _read_lines(env_path)
    port_values = derive_ports(suffix)
    skip_prefixes = tuple(f"{key}=" for key in [*port_values, XDEBUG_KEY])

    apply_db = created or reset_db
    new_lines: list[str] = []
    seen: set[str] = set()

    for line in lines:
        stripped = line.strip()
        if stripped.startswith(skip_prefixes):
            continue

        if apply_db:
            key = _matching_key(stripped, DB_DEFAULTS)
            if key is not None:
                new_lines.append(f"{key}={DB_DEFAULTS[key]}")
                seen.add(key)
                continue

        new_lines.append(line)

    if apply_db:
        new_lines.extend(
            f"{key}={value}" for key, value in DB_DEFAULTS.items() if key not in seen
        )

    while new_lines and not new_lines[-1].strip():
        new_lines.pop()

    new_lines.append("")
    new_lines.extend(f"{key}={port}" for key, port in port_values.items())
    new_lines.append("")
    new_lines.append(f"{XDEBUG_KEY}={XDEBUG_VALUE}")

    env_path.write_bytes(("\n".join(new_lines) + "\n").encode("utf-8", "surrogateescape"))
    return created


def _matching_key(line: str, keys: Iterable[str]) -> str | None:
    for key in keys:
        if line.startswith(f"{key}="):
            return key
    return None


def split_lines(content: str) -> list[str]:
    """Split on newlines only, dropping a trailing CR from each line.

    Other characters str.splitlines() treats as breaks (form feed,
    U+2028, ...) stay inside their line.
    """
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _read_lines(path: Path) -> list[str]:
    # Bytes that are not UTF-8 survive a read/write round trip unchanged
    return split_lines(path.read_bytes().decode("utf-8", "surrogateescape"))
