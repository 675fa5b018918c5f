"""Git-backed version store for notes.

The store root is a git repository of its own. Every edit that changes a
note ends in exactly one commit, whose message is the note's path, or
``"<new> -> <old>"`` when a tracked note was renamed.
"""

from __future__ import annotations

import logging
import os
import socket
import subprocess
from collections.abc import Callable
from pathlib import Path

from jote.config import CONTROL_DIR, DIR_MODE
from jote.errors import CommitError, StoreInitError
from jote.models import CommitKind, CommitResult, FileStatus

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "jote"


def branch_name_for_host(hostname: str) -> str:
    """First label of the hostname, e.g. ``laptop`` for ``laptop.local``."""
    return hostname.split(".")[0]


class VersionedStore:
    """A git repository rooted at the note store directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    @classmethod
    def open_or_init(
        cls,
        root: Path,
        hostname: Callable[[], str] = socket.gethostname,
    ) -> VersionedStore:
        """Open the repository at ``root``, creating it if needed.

        A new repository gets its default branch named after this machine,
        so several machines syncing the same store keep separate branches.
        """
        store = cls(root)
        if (store.root / CONTROL_DIR).exists():
            try:
                toplevel = store._git("rev-parse", "--show-toplevel").stdout.strip()
            except (OSError, subprocess.CalledProcessError) as e:
                raise StoreInitError(
                    f"unable to open note store at {store.root}: {_detail(e)}"
                ) from e
            if Path(toplevel).resolve() != store.root.resolve():
                raise StoreInitError(
                    f"unable to open note store at {store.root}: "
                    f"repository belongs to {toplevel}"
                )
            logger.debug(f"Opened note store at {store.root}")
        else:
            store._init(hostname)
        store._ensure_identity(hostname)
        return store

    def _init(self, hostname: Callable[[], str]) -> None:
        branch = branch_name_for_host(_resolve_hostname(hostname))
        if not branch:
            raise StoreInitError("unable to create note store: hostname is empty")

        try:
            self.root.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
            self._git("init", "--quiet")
        except (OSError, subprocess.CalledProcessError) as e:
            raise StoreInitError(
                f"unable to create note store at {self.root}: {_detail(e)}"
            ) from e

        try:
            self._git("symbolic-ref", "HEAD", f"refs/heads/{branch}")
        except (OSError, subprocess.CalledProcessError) as e:
            raise StoreInitError(
                f"unable to create note store: cannot set branch '{branch}': "
                f"{_detail(e)}"
            ) from e
        logger.info(f"Initialized note store in {self.root} (branch: {branch})")

    def _ensure_identity(self, hostname: Callable[[], str]) -> None:
        """Write a repository-local identity when git has none configured.

        The fallback is ``jote <jote@HOSTNAME>``.
        """
        try:
            for key in ("user.name", "user.email"):
                if self._git("config", key, check=False).returncode != 0:
                    if key == "user.name":
                        value = DEFAULT_AUTHOR
                    else:
                        value = f"{DEFAULT_AUTHOR}@{_resolve_hostname(hostname)}"
                    self._git("config", "--local", key, value)
                    logger.debug(f"Set {key} for {self.root}")
        except (OSError, subprocess.CalledProcessError) as e:
            raise StoreInitError(
                f"unable to configure note store at {self.root}: {_detail(e)}"
            ) from e

    def _git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        logger.debug(f"git {' '.join(args)}")
        return subprocess.run(
            ["git", "--literal-pathspecs", *args],
            cwd=self.root,
            capture_output=True,
            text=True,
            check=check,
        )

    def status(self, path: str) -> FileStatus:
        """Whether ``path`` is untracked in the working tree."""
        try:
            result = self._git(
                "status", "--porcelain=v1", "-z", "--untracked-files=all", "--", path
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise CommitError(
                f"filename: {path}, error running status: {_detail(e)}"
            ) from e
        for record in result.stdout.split("\0"):
            if record.startswith("??"):
                return FileStatus.UNTRACKED
        return FileStatus.TRACKED

    def is_untracked(self, path: str) -> bool:
        return self.status(path) is FileStatus.UNTRACKED

    def commit(self, new_name: str, old_name: str = "") -> CommitResult:
        """Record ``new_name`` in history, reconciling a rename from ``old_name``.

        1. no old name, or unchanged name: add ``new_name``.
        2. old name never committed: rename the file on disk, then add.
        3. old name tracked: ``git mv`` so the history keeps the lineage.
        """
        if not old_name or old_name == new_name:
            kind = CommitKind.ADD
            self._add(new_name)
            message = new_name
        elif self.is_untracked(old_name):
            kind = CommitKind.UNTRACKED_RENAME
            if (self.root / new_name).exists():
                raise CommitError(
                    f"could not rename {old_name}: {new_name} already exists"
                )
            try:
                os.rename(self.root / old_name, self.root / new_name)
            except OSError as e:
                raise CommitError(f"could not rename {old_name}: {e}") from e
            self._add(new_name)
            message = new_name
        else:
            kind = CommitKind.MOVE
            try:
                self._git("mv", "--", old_name, new_name)
            except (OSError, subprocess.CalledProcessError) as e:
                raise CommitError(
                    f"filename: {old_name}, error running Move: {_detail(e)}"
                ) from e
            self._add(new_name)
            message = f"{new_name} -> {old_name}"

        try:
            self._git("commit", "--quiet", "-m", message)
        except (OSError, subprocess.CalledProcessError) as e:
            raise CommitError(
                f"filename: {new_name}, error running Commit: {_detail(e)}"
            ) from e
        logger.info(f"Committed {message}")
        return CommitResult(
            kind=kind,
            path=new_name,
            message=message,
            old_path="" if kind is CommitKind.ADD else old_name,
        )

    def _add(self, path: str) -> None:
        try:
            self._git("add", "--", path)
        except (OSError, subprocess.CalledProcessError) as e:
            raise CommitError(
                f"filename: {path}, error running Add: {_detail(e)}"
            ) from e

    def has_commits(self) -> bool:
        result = self._git("rev-parse", "--verify", "--quiet", "HEAD", check=False)
        return result.returncode == 0

    def log(self, limit: int | None = None) -> list[str]:
        """Commit messages on the current branch, newest first."""
        if not self.has_commits():
            return []
        args = ["log", "--format=%s"]
        if limit is not None:
            args.append(f"--max-count={limit}")
        return self._git(*args).stdout.splitlines()

    def current_branch(self) -> str:
        return self._git("symbolic-ref", "--short", "HEAD").stdout.strip()


def _resolve_hostname(hostname: Callable[[], str]) -> str:
    try:
        host = hostname()
    except OSError as e:
        raise StoreInitError(f"unable to create note store: {e}") from e
    if not host:
        raise StoreInitError("unable to create note store: hostname is empty")
    return host


def _detail(error: Exception) -> str:
    if isinstance(error, subprocess.CalledProcessError):
        output = (error.stderr or error.stdout or "").strip()
        return output or f"exit status {error.returncode}"
    return str(error)
