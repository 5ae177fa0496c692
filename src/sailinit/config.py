"""Configuration for sailinit."""

from pathlib import Path

REGISTRY_FILENAME = ".laravel-sail-ports.json"

# PHP version used when none is given and none can be detected
DEFAULT_PHP_VERSION = "84"

# Offered on the very first run on a host
DEFAULT_START_SUFFIX = 48


def get_registry_path() -> Path:
    """Get the registry file path.

    Returns:
        Path to the registry file in the user's home directory
    """
    return Path.home() / REGISTRY_FILENAME
