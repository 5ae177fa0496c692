"""Common utilities for CLI commands."""

from ..console import console, debug, error, error_console, header, info, success, warning
from ..registry import RegistryStore

# Re-export console utilities
__all__ = [
    "console",
    "error_console",
    "debug",
    "header",
    "info",
    "success",
    "warning",
    "error",
    "get_store",
]


def get_store() -> RegistryStore:
    """Get registry store instance."""
    store = RegistryStore()
    debug(f"Using registry {store.path}")
    return store
