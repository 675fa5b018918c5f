"""VersionedStore behaviour against a real git repository."""

import subprocess

import pytest

from jote.errors import CommitError, StoreInitError
from jote.git import VersionedStore, branch_name_for_host
from jote.models import CommitKind, FileStatus
from tests.support.notes import note_text, write_note


def _tracked_files(root):
    result = subprocess.run(
        ["git", "ls-files"], cwd=root, capture_output=True, text=True, check=True
    )
    return result.stdout.splitlines()


def test_branch_name_is_first_hostname_label():
    assert branch_name_for_host("laptop.home.arpa") == "laptop"
    assert branch_name_for_host("desktop") == "desktop"


def test_init_creates_repository_on_host_branch(store, store_root):
    assert (store_root / ".git").is_dir()
    assert store.current_branch() == "testhost"
    assert store.log() == []


def test_open_existing_repository_keeps_its_branch(store, store_root):
    write_note(store_root, "a.md", note_text("a"))
    store.commit("a.md")

    reopened = VersionedStore.open_or_init(store_root, hostname=lambda: "other")

    assert reopened.current_branch() == "testhost"
    assert reopened.log() == ["a.md"]


def test_hostname_failure_raises_store_init_error(tmp_path):
    def _fail():
        raise OSError("no hostname")

    with pytest.raises(StoreInitError, match="no hostname"):
        VersionedStore.open_or_init(tmp_path / "jote", hostname=_fail)


def test_empty_hostname_raises_store_init_error(tmp_path):
    with pytest.raises(StoreInitError, match="hostname"):
        VersionedStore.open_or_init(tmp_path / "jote", hostname=lambda: "")


def test_broken_repository_raises_store_init_error(tmp_path):
    root = tmp_path / "jote"
    (root / ".git").mkdir(parents=True)

    with pytest.raises(StoreInitError, match="unable to open"):
        VersionedStore.open_or_init(root)


def test_unwritable_base_raises_store_init_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(StoreInitError):
        VersionedStore.open_or_init(blocker / "jote", hostname=lambda: "h")


def test_commit_without_old_name_adds(store, store_root):
    write_note(store_root, "170000.md", note_text())

    result = store.commit("170000.md", "")

    assert result.kind is CommitKind.ADD
    assert result.message == "170000.md"
    assert store.log() == ["170000.md"]
    assert _tracked_files(store_root) == ["170000.md"]


def test_commit_same_name_adds(store, store_root):
    write_note(store_root, "Groceries.md", note_text("Groceries"))
    store.commit("Groceries.md")
    write_note(store_root, "Groceries.md", note_text("Groceries", body="milk\n"))

    result = store.commit("Groceries.md", "Groceries.md")

    assert result.kind is CommitKind.ADD
    assert store.log() == ["Groceries.md", "Groceries.md"]


def test_untracked_rename_moves_file_and_commits_once(store, store_root):
    write_note(store_root, "170000.md", note_text("Draft"))

    result = store.commit("Draft.md", "170000.md")

    assert result.kind is CommitKind.UNTRACKED_RENAME
    assert result.message == "Draft.md"
    assert not (store_root / "170000.md").exists()
    assert (store_root / "Draft.md").exists()
    assert store.log() == ["Draft.md"]


def test_tracked_rename_moves_and_records_lineage(store, store_root):
    write_note(store_root, "Groceries.md", note_text("Groceries"))
    store.commit("Groceries.md")
    write_note(store_root, "Groceries.md", note_text("Shopping", body="milk\n"))

    result = store.commit("Shopping.md", "Groceries.md")

    assert result.kind is CommitKind.MOVE
    assert result.message == "Shopping.md -> Groceries.md"
    assert not (store_root / "Groceries.md").exists()
    assert _tracked_files(store_root) == ["Shopping.md"]
    assert store.log() == ["Shopping.md -> Groceries.md", "Groceries.md"]
    committed = subprocess.run(
        ["git", "show", "HEAD:Shopping.md"],
        cwd=store_root,
        capture_output=True,
        text=True,
        check=True,
    ).stdout
    assert "title: Shopping" in committed


def test_tracked_rename_into_subdirectory(store, store_root):
    write_note(store_root, "standup.md", note_text())
    store.commit("standup.md")
    (store_root / "work").mkdir()

    store.commit("work/standup.md", "standup.md")

    assert _tracked_files(store_root) == ["work/standup.md"]


def test_status_reports_untracked_and_tracked(store, store_root):
    write_note(store_root, "a.md", note_text())
    assert store.status("a.md") is FileStatus.UNTRACKED
    assert store.is_untracked("a.md")

    store.commit("a.md")

    assert store.status("a.md") is FileStatus.TRACKED
    assert not store.is_untracked("a.md")


def test_adding_missing_file_raises_commit_error(store):
    with pytest.raises(CommitError, match="missing.md"):
        store.commit("missing.md")
    assert store.log() == []


def test_moving_onto_existing_tracked_note_raises_commit_error(store, store_root):
    write_note(store_root, "a.md", note_text())
    write_note(store_root, "b.md", note_text(body="b"))
    store.commit("a.md")
    store.commit("b.md")

    with pytest.raises(CommitError, match="Move"):
        store.commit("b.md", "a.md")
    assert store.log() == ["b.md", "a.md"]


def test_log_limit(store, store_root):
    for name in ("a.md", "b.md", "c.md"):
        write_note(store_root, name, note_text())
        store.commit(name)

    assert store.log(limit=2) == ["c.md", "b.md"]


def test_identity_is_configured_locally_when_missing(store, store_root):
    result = subprocess.run(
        ["git", "config", "--local", "user.email"],
        cwd=store_root,
        capture_output=True,
        text=True,
        check=True,
    )

    assert result.stdout.strip() == "jote@testhost.example.com"


def _committed_paths(root):
    result = subprocess.run(
        ["git", "show", "--name-only", "--format=", "HEAD"],
        cwd=root,
        capture_output=True,
        text=True,
        check=True,
    )
    return [line for line in result.stdout.splitlines() if line]


@pytest.mark.parametrize("name", ["Todo?.md", "Todo*.md", "[WIP] plan.md"])
def test_wildcard_characters_in_names_are_literal(store, store_root, name):
    write_note(store_root, "Todo1.md", "---\nunterminated\n")
    write_note(store_root, "W.md", "stray")
    write_note(store_root, name, note_text())

    store.commit(name)

    assert _committed_paths(store_root) == [name]
    assert store.is_untracked("Todo1.md")


def test_status_of_wildcard_name_ignores_matching_files(store, store_root):
    write_note(store_root, "Todo?.md", note_text())
    store.commit("Todo?.md")
    write_note(store_root, "Todo1.md", note_text())

    assert store.status("Todo?.md") is FileStatus.TRACKED


def test_untracked_rename_refuses_to_overwrite(store, store_root):
    write_note(store_root, "170000.md", note_text("Draft"))
    write_note(store_root, "Draft.md", "someone else's text")

    with pytest.raises(CommitError, match="already exists"):
        store.commit("Draft.md", "170000.md")

    assert (store_root / "170000.md").exists()
    assert (store_root / "Draft.md").read_text("utf-8") == "someone else's text"
    assert store.log() == []
