"""Command modules for sailinit CLI."""

from .clean import clean
from .list import list_cmd
from .remove import remove
from .services import down, stop
from .setup import setup
from .status import status

__all__ = [
    "clean",
    "down",
    "list_cmd",
    "remove",
    "setup",
    "status",
    "stop",
]
