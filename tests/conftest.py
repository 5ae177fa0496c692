"""Test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from sailinit.registry import Registry, RegistryStore


@pytest.fixture
def temp_dir():
    """Temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def store(temp_dir):
    """Registry store backed by a file in the temp directory."""
    return RegistryStore(temp_dir / "ports.json")


@pytest.fixture
def project_dir(temp_dir):
    """An existing project directory."""
    path = temp_dir / "project"
    path.mkdir()
    return path


@pytest.fixture
def make_registry(store):
    """Write a registry file with the given projects."""

    def _make(projects, max_suffix=None):
        if max_suffix is None:
            max_suffix = max(projects.values(), default=0)
        store.save(Registry(max_suffix=max_suffix, projects=dict(projects)))
        return store

    return _make
