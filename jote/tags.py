"""Tag index built from the front matter of every note in the store."""

from __future__ import annotations

import logging
from pathlib import Path

from jote.fs import walk_files
from jote.metadata import parse_file

logger = logging.getLogger(__name__)


def build(root: Path) -> dict[str, list[str]]:
    """Map each tag to the notes carrying it, in walk order.

    Rebuilt on every call. A note that fails to parse aborts the whole
    build with ``ParseError``.
    """
    root = Path(root)
    index: dict[str, list[str]] = {}
    for rel_path in walk_files(root):
        entry = parse_file(root / rel_path)
        for tag in entry.tags:
            paths = index.setdefault(tag, [])
            if rel_path not in paths:
                paths.append(rel_path)
    logger.debug(f"Indexed {len(index)} tags under {root}")
    return index


def describe_tag(tag: str, paths: list[str]) -> str:
    """Preview text for a tag: the notes that carry it."""
    return f"Files with the tag {tag}:\n\n" + "\n".join(paths) + "\n"
