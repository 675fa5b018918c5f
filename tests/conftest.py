"""Shared fixtures for jote tests."""

from pathlib import Path

import pytest

from jote.git import VersionedStore
from jote.lifecycle import NoteLifecycle

TEST_HOSTNAME = "testhost.example.com"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user git config, settings, and editor out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for name in (
        "EDITOR",
        "JOTE_STORE_PATH",
        "XDG_CONFIG_HOME",
        "GIT_AUTHOR_NAME",
        "GIT_AUTHOR_EMAIL",
        "GIT_COMMITTER_NAME",
        "GIT_COMMITTER_EMAIL",
        "GIT_DIR",
        "GIT_WORK_TREE",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def store_root(tmp_path) -> Path:
    return tmp_path / "share" / "jote"


@pytest.fixture
def store(store_root) -> VersionedStore:
    return VersionedStore.open_or_init(store_root, hostname=lambda: TEST_HOSTNAME)


@pytest.fixture
def make_lifecycle(store):
    """Build a lifecycle around ``store`` with a given editor and clock."""

    def _make(editor, now: float = 170000.0) -> NoteLifecycle:
        return NoteLifecycle(store, editor, clock=lambda: now)

    return _make
