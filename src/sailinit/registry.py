"""JSON registry of project directories and their port suffixes."""

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import get_registry_path
from .errors import StoreReadError, StoreWriteError


def normalize_project_path(path: str | Path) -> str:
    """Return the absolute path used as a registry key.

    Symlinks are not resolved; only the path text is made absolute and
    normalized, so ``./app`` and ``/home/me/app`` share one entry.
    """
    return os.path.abspath(path)


@dataclass
class Registry:
    """Project suffix assignments plus the high-water mark."""

    max_suffix: int = 0
    projects: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Registry":
        """Build a registry from decoded JSON.

        Raises:
            ValueError: If the data has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValueError("registry must be a JSON object")

        max_suffix = data.get("max_suffix", 0)
        if max_suffix is None:
            max_suffix = 0
        if not _is_int(max_suffix):
            raise ValueError(f"max_suffix must be an integer, got {max_suffix!r}")

        projects = data.get("projects", {})
        if projects is None:
            projects = {}
        if not isinstance(projects, dict):
            raise ValueError("projects must be a JSON object")
        for path, suffix in projects.items():
            if not _is_int(suffix):
                raise ValueError(f"suffix for {path} must be an integer, got {suffix!r}")

        return cls(max_suffix=max_suffix, projects=dict(projects))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON shape."""
        return {"max_suffix": self.max_suffix, "projects": dict(self.projects)}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class RegistryStore:
    """Load and save the registry file.

    Every save rewrites the whole file. There is no locking, so two
    concurrent processes can lose one another's update (last write wins).
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Path to the registry JSON file. If None, uses the default
                location in the user's home directory.
        """
        self.path = Path(path) if path is not None else get_registry_path()

    def load(self) -> tuple[Registry, bool]:
        """Read the registry.

        Returns:
            Tuple of (registry, existed_on_disk). A missing file yields an
            empty registry and False.

        Raises:
            StoreReadError: If the file cannot be read or is malformed
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            return Registry(), False
        except OSError as e:
            raise StoreReadError(f"cannot read {self.path}: {e}") from e

        try:
            registry = Registry.from_dict(json.loads(data))
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting recurses
            raise StoreReadError(f"malformed registry {self.path}: {e}") from e

        return registry, True

    def save(self, registry: Registry) -> None:
        """Write the full registry, replacing the file in one step.

        Args:
            registry: Registry to persist

        Raises:
            StoreWriteError: If the file cannot be written
        """
        content = json.dumps(registry.to_dict(), indent=2) + "\n"
        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.tmp.", dir=str(self.path.parent)
            )
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreWriteError(f"cannot write {self.path}: {e}") from e
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
