"""Listing and cleanup of registered projects."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import NotRegisteredError
from .ports import derive_ports
from .registry import RegistryStore, normalize_project_path


@dataclass
class ProjectEntry:
    """A registry assignment joined with a check of the directory on disk."""

    path: str
    suffix: int
    exists: bool

    @property
    def ports(self) -> dict[str, int]:
        return derive_ports(self.suffix)


@dataclass
class PruneResult:
    """Result of a prune operation."""

    removed: list[ProjectEntry] = field(default_factory=list)
    kept: list[ProjectEntry] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of entries removed (or that would be, on a dry run)."""
        return len(self.removed)


class Pruner:
    """Inspect and clean up registered projects."""

    def __init__(self, store: RegistryStore) -> None:
        """Initialize pruner.

        Args:
            store: Registry store instance
        """
        self.store = store

    def list_projects(self) -> list[ProjectEntry]:
        """List every registered project, ordered by suffix then path.

        Returns:
            List of project entries
        """
        registry, _ = self.store.load()
        entries = [
            ProjectEntry(path=path, suffix=suffix, exists=_path_exists(path))
            for path, suffix in registry.projects.items()
        ]
        entries.sort(key=lambda e: (e.suffix, e.path))
        return entries

    def prune(self, dry_run: bool = False) -> PruneResult:
        """Remove projects whose directory no longer exists.

        The registry is only written when something was removed.

        Args:
            dry_run: If True, don't delete, just report what would be deleted

        Returns:
            PruneResult with details of operation
        """
        result = PruneResult()
        registry, _ = self.store.load()

        for path, suffix in sorted(registry.projects.items()):
            entry = ProjectEntry(path=path, suffix=suffix, exists=_path_exists(path))
            if entry.exists:
                result.kept.append(entry)
            else:
                result.removed.append(entry)

        if result.removed and not dry_run:
            for entry in result.removed:
                del registry.projects[entry.path]
            self.store.save(registry)

        return result

    def remove_project(self, project_dir: str | Path) -> int:
        """Remove a single project from the registry.

        The high-water mark is left untouched.

        Args:
            project_dir: Project directory

        Returns:
            The suffix the project held

        Raises:
            NotRegisteredError: If the project has no entry
        """
        registry, _ = self.store.load()
        key = normalize_project_path(project_dir)

        if key not in registry.projects:
            raise NotRegisteredError(key)

        suffix = registry.projects.pop(key)
        self.store.save(registry)
        return suffix


def _path_exists(path: str) -> bool:
    """Return False only when the path is definitely gone.

    A path that can't be inspected (e.g. permission denied) counts as
    present, so it is never pruned.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError:
        return True
    return True
