"""Tests for registry module."""

import json
import os

import pytest

from sailinit.errors import StoreReadError, StoreWriteError
from sailinit.registry import Registry, RegistryStore, normalize_project_path


def test_load_missing_file(store):
    """Test loading when no registry file exists yet."""
    registry, existed = store.load()

    assert existed is False
    assert registry == Registry(max_suffix=0, projects={})
    assert not store.path.exists()


def test_save_and_load(store):
    """Test that a saved registry loads back unchanged."""
    registry = Registry(max_suffix=52, projects={"/a": 51, "/b": 52})

    store.save(registry)
    loaded, existed = store.load()

    assert existed is True
    assert loaded == registry


def test_save_writes_expected_json(store):
    """Test the on-disk format."""
    store.save(Registry(max_suffix=48, projects={"/a": 48}))

    data = json.loads(store.path.read_text())
    assert data == {"max_suffix": 48, "projects": {"/a": 48}}


def test_save_overwrites_existing(store):
    """Test that save replaces the whole file."""
    store.save(Registry(max_suffix=10, projects={"/a": 10, "/b": 5}))
    store.save(Registry(max_suffix=10, projects={"/a": 10}))

    loaded, _ = store.load()
    assert loaded.projects == {"/a": 10}


def test_save_leaves_no_temp_files(store):
    """Test that only the registry file remains after saving."""
    store.save(Registry(max_suffix=1, projects={"/a": 1}))

    assert os.listdir(store.path.parent) == [store.path.name]


def test_save_creates_parent_directory(temp_dir):
    """Test saving into a directory that doesn't exist yet."""
    store = RegistryStore(temp_dir / "nested" / "ports.json")

    store.save(Registry())

    assert store.path.exists()


def test_load_defaults_missing_fields(store):
    """Test that absent keys fall back to defaults."""
    store.path.write_text("{}")

    registry, existed = store.load()

    assert existed is True
    assert registry.max_suffix == 0
    assert registry.projects == {}


def test_load_ignores_unknown_fields(store):
    """Test that extra top-level keys don't break loading."""
    store.path.write_text(json.dumps({"max_suffix": 3, "projects": {"/a": 3}, "extra": True}))

    registry, _ = store.load()

    assert registry == Registry(max_suffix=3, projects={"/a": 3})


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[]",
        '{"max_suffix": "high"}',
        '{"projects": []}',
        '{"projects": {"/a": "51"}}',
        '{"max_suffix": true}',
        b'{"projects": {"/\xff": 1}}',
        "[" * 100000,
    ],
)
def test_load_malformed(store, content):
    """Test that malformed content raises StoreReadError."""
    if isinstance(content, bytes):
        store.path.write_bytes(content)
    else:
        store.path.write_text(content)

    with pytest.raises(StoreReadError):
        store.load()


def test_malformed_file_is_not_overwritten_by_load(store):
    """Test that a failed load leaves the file as it was."""
    store.path.write_text("not json")

    with pytest.raises(StoreReadError):
        store.load()

    assert store.path.read_text() == "not json"


def test_save_failure_raises_store_write_error(temp_dir):
    """Test that an unwritable location raises StoreWriteError."""
    blocker = temp_dir / "blocker"
    blocker.write_text("")
    store = RegistryStore(blocker / "ports.json")

    with pytest.raises(StoreWriteError):
        store.save(Registry())


def test_default_path_under_home(monkeypatch, temp_dir):
    """Test the default registry location is a dotfile in the home directory."""
    monkeypatch.setenv("HOME", str(temp_dir))

    store = RegistryStore()

    assert store.path == temp_dir / ".laravel-sail-ports.json"


def test_normalize_project_path_relative(monkeypatch, temp_dir):
    """Test that relative and absolute spellings share a key."""
    temp_dir = temp_dir.resolve()
    project = temp_dir / "app"
    project.mkdir()
    monkeypatch.chdir(temp_dir)

    assert normalize_project_path("app") == normalize_project_path(str(project))
    assert normalize_project_path("./app/") == normalize_project_path(project)
    assert normalize_project_path("app/../app") == str(project)
