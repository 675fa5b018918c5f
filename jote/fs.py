"""Directory walking over the note store."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from jote.config import CONTROL_DIR

logger = logging.getLogger(__name__)

SkipPredicate = Callable[[str], bool]


def is_control_dir(name: str) -> bool:
    return name == CONTROL_DIR


def walk_files(root: Path, skip: SkipPredicate = is_control_dir) -> Iterator[str]:
    """Yield every file under ``root`` as a relative POSIX path.

    Directories whose name matches ``skip`` are pruned with their whole
    subtree. Entries are visited in sorted order so results are stable.
    Walk errors propagate as ``OSError``.
    """
    root = Path(root)

    def _raise(error: OSError) -> None:
        raise error

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(d for d in dirnames if not skip(d))
        base = Path(dirpath)
        for name in sorted(filenames):
            yield (base / name).relative_to(root).as_posix()


def list_notes(root: Path) -> list[str]:
    """All note paths in the store, excluding the git control directory."""
    notes = list(walk_files(root))
    logger.debug(f"Found {len(notes)} notes under {root}")
    return notes


def sorted_for_selection(items: list[str]) -> list[str]:
    """Reverse-sorted copy, so the newest timestamp names come first."""
    return sorted(items, reverse=True)
