"""Exceptions raised by sailinit."""


class SailInitError(Exception):
    """Base class for sailinit errors."""

    pass


class PortRangeError(SailInitError):
    """Raised when a port suffix is outside the valid range."""

    pass


class StoreReadError(SailInitError):
    """Raised when the registry file exists but cannot be read or parsed."""

    pass


class StoreWriteError(SailInitError):
    """Raised when the registry file cannot be written."""

    pass


class CollisionError(SailInitError):
    """Raised when a suffix is already assigned to another project."""

    def __init__(self, suffix: int, other_path: str) -> None:
        super().__init__(
            f"Suffix {suffix} is already in use by another project:\n{other_path}"
        )
        self.suffix = suffix
        self.other_path = other_path


class NotRegisteredError(SailInitError):
    """Raised when removing a project that has no registry entry."""

    def __init__(self, path: str) -> None:
        super().__init__(f"project not registered: {path}")
        self.path = path
