"""Note lifecycle: create, edit, rename by title, and commit.

A new note starts under a disposable ``<unix-seconds>.md`` name. Once it has
a title it is renamed to ``<title>.md`` and the version history records the
move.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from jote.config import CONTROL_DIR, DIR_MODE, FILE_MODE, NOTE_SUFFIX, TEMPLATE
from jote.editor import Editor
from jote.errors import EditorError, ParseError
from jote.fingerprints import changed, fingerprint_file
from jote.fs import is_control_dir
from jote.git import VersionedStore
from jote.log import clickable_path
from jote.metadata import parse_file
from jote.models import ReviewAction, ReviewOutcome

logger = logging.getLogger(__name__)


class NoteLifecycle:
    def __init__(
        self,
        store: VersionedStore,
        editor: Editor,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.editor = editor
        self.clock = clock

    @property
    def root(self) -> Path:
        return self.store.root

    def add(self) -> ReviewOutcome:
        """Write a blank templated note and hand it to the editor."""
        name = f"{int(self.clock())}{NOTE_SUFFIX}"
        file_path = self.root / name
        with open(file_path, "x", encoding="utf-8") as f:
            f.write(TEMPLATE)
        file_path.chmod(FILE_MODE)
        logger.debug(f"Created draft {name}")
        return self.review(name, is_new=True)

    def open(self, name: str) -> ReviewOutcome:
        """Hand an existing note to the editor."""
        return self.review(name, is_new=False)

    def review(self, name: str, is_new: bool) -> ReviewOutcome:
        file_path = self.root / name

        if not self._edit(file_path):
            if is_new:
                file_path.unlink()
                logger.info("Note left empty, discarded")
                return ReviewOutcome(ReviewAction.ABANDONED, name)
            logger.debug(f"No changes to {name}")
            return ReviewOutcome(ReviewAction.UNCHANGED, name)

        entry = parse_file(file_path)
        new_name, old_name = name, ""
        if entry.title:
            new_name = self._name_for_title(entry.title)
            old_name = name
            (self.root / new_name).parent.mkdir(
                parents=True, exist_ok=True, mode=DIR_MODE
            )

        result = self.store.commit(new_name, old_name)
        logger.info(f"Saved {clickable_path(self.root / new_name)}")
        return ReviewOutcome(ReviewAction.COMMITTED, new_name, result)

    def _edit(self, file_path: Path) -> bool:
        """Run the editor on ``file_path``; True if its bytes changed."""
        before = fingerprint_file(file_path)
        try:
            status = self.editor(file_path.absolute())
        except OSError as e:
            raise EditorError(f"error calling editor on {file_path}: {e}") from e
        if status != 0:
            raise EditorError(
                f"error calling editor on {file_path}: exit status {status}"
            )
        after = fingerprint_file(file_path)
        return changed(before, after)

    def _name_for_title(self, title: str) -> str:
        name = f"{title}{NOTE_SUFFIX}"
        root = self.root.resolve()
        target = (root / name).resolve()
        if Path(name).is_absolute() or not target.is_relative_to(root):
            raise ParseError(f"title '{title}' points outside the note store")
        relative = target.relative_to(root)
        if any(is_control_dir(part) for part in relative.parts):
            raise ParseError(f"title '{title}' points into {CONTROL_DIR}")
        return relative.as_posix()
