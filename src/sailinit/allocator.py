"""Port suffix allocation for sailinit."""

from dataclasses import dataclass
from pathlib import Path

from .envfile import read_env_lines, recover_suffix_from_env_text
from .errors import CollisionError
from .ports import validate_suffix
from .registry import RegistryStore, normalize_project_path


@dataclass
class Suggestion:
    """Suffix proposed for a project."""

    suffix: int
    existing: bool  # Taken from the registry or the project's .env
    registry_existed: bool  # False on the first run on this host


class SuffixAllocator:
    """Suggest, check and record port suffixes for project directories."""

    def __init__(self, store: RegistryStore) -> None:
        """Initialize allocator.

        Args:
            store: Registry store instance
        """
        self.store = store

    def suggest(self, project_dir: str | Path) -> Suggestion:
        """Suggest a suffix for a project without changing any state.

        Strategy:
        1. Registered project → its registry suffix
        2. APP_PORT recoverable from the project's .env → derived suffix
        3. Otherwise → one past the highest suffix ever assigned

        Args:
            project_dir: Project directory

        Returns:
            Suggestion for the project

        Raises:
            StoreReadError: If the registry file is malformed
        """
        registry, existed = self.store.load()
        key = normalize_project_path(project_dir)

        if key in registry.projects:
            return Suggestion(registry.projects[key], existing=True, registry_existed=existed)

        lines = read_env_lines(Path(key))
        if lines is not None:
            recovered = recover_suffix_from_env_text(lines)
            if recovered is not None:
                return Suggestion(recovered, existing=True, registry_existed=existed)

        return Suggestion(registry.max_suffix + 1, existing=False, registry_existed=existed)

    def find_conflict(self, project_dir: str | Path, suffix: int) -> str | None:
        """Find another project already holding a suffix.

        Paths are checked in sorted order, so with several conflicting
        entries the lexicographically first is reported.

        Args:
            project_dir: Project asking for the suffix
            suffix: Candidate suffix

        Returns:
            Path of the conflicting project, or None
        """
        registry, _ = self.store.load()
        key = normalize_project_path(project_dir)

        for path in sorted(registry.projects):
            if path != key and registry.projects[path] == suffix:
                return path
        return None

    def save_project_suffix(self, project_dir: str | Path, suffix: int) -> None:
        """Record a suffix for a project and raise the high-water mark.

        Args:
            project_dir: Project directory
            suffix: Suffix to record
        """
        registry, _ = self.store.load()
        registry.projects[normalize_project_path(project_dir)] = suffix
        if suffix > registry.max_suffix:
            registry.max_suffix = suffix
        self.store.save(registry)

    def check(self, project_dir: str | Path, suffix: int) -> None:
        """Check that a chosen suffix may be assigned to a project.

        Nothing is written; call save_project_suffix once the user has
        confirmed.

        Args:
            project_dir: Project directory
            suffix: Suffix chosen by the user

        Raises:
            PortRangeError: If the suffix is out of range
            CollisionError: If another project holds the suffix
        """
        validate_suffix(suffix)
        other = self.find_conflict(project_dir, suffix)
        if other is not None:
            raise CollisionError(suffix, other)
