"""Port families derived from a project suffix, and host availability checks."""

import socket
from collections.abc import Callable
from dataclasses import dataclass

from .errors import PortRangeError

# Role -> base port. Order matters: it is the order ports are reported and
# written to .env.
PORT_BASES: dict[str, int] = {
    "APP": 8000,
    "FORWARD_DB": 3300,
    "FORWARD_REDIS": 6300,
    "FORWARD_MEILISEARCH": 7700,
    "FORWARD_MAILPIT_DASHBOARD": 18100,
    "FORWARD_MAILPIT": 1000,
    "VITE": 5100,
}

APP_PORT_BASE = PORT_BASES["APP"]

MAX_PORT = 65535

# Highest suffix that keeps the highest base inside the TCP port space
MAX_SUFFIX = MAX_PORT - max(PORT_BASES.values())


@dataclass
class BusyPort:
    """A derived port that is already bound on this host."""

    name: str  # env key, e.g. APP_PORT
    port: int


def env_key(role: str) -> str:
    """Return the .env key for a port role (APP -> APP_PORT)."""
    return f"{role}_PORT"


def validate_suffix(suffix: int) -> None:
    """Check that a suffix is within the valid range.

    Args:
        suffix: Candidate port suffix

    Raises:
        PortRangeError: If suffix is negative or too large
    """
    if suffix < 0:
        raise PortRangeError(f"suffix must be non-negative, got {suffix}")
    if suffix > MAX_SUFFIX:
        highest = max(PORT_BASES.values()) + suffix
        raise PortRangeError(
            f"suffix {suffix} too large: highest port would be {highest} (max {MAX_PORT})"
        )


def derive_ports(suffix: int) -> dict[str, int]:
    """Map every .env port key to its port for a suffix.

    Args:
        suffix: Port suffix

    Returns:
        Ordered dict of env key -> port
    """
    return {env_key(role): base + suffix for role, base in PORT_BASES.items()}


def is_port_available(port: int) -> bool:
    """Test if a TCP port can be bound on all interfaces.

    Args:
        port: Port number to test

    Returns:
        True if port is available, False otherwise
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind(("", port))
            return True
    except OSError:
        return False


def check_ports_for_suffix(
    suffix: int,
    is_available: Callable[[int], bool] = is_port_available,
) -> list[BusyPort]:
    """Return the derived ports for a suffix that are already in use.

    Args:
        suffix: Port suffix
        is_available: Probe used for each port

    Returns:
        Busy ports in role order; empty if all are free
    """
    return [
        BusyPort(name=name, port=port)
        for name, port in derive_ports(suffix).items()
        if not is_available(port)
    ]
