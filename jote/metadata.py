"""Front matter parsing for notes.

A note starts with a YAML block between two ``---`` marker lines::

    ---
    title: Groceries
    tags: [food, errands]
    ---
    body text

Only ``title`` and ``tags`` are interpreted; everything after the closing
marker is the body.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from frontmatter import YAMLHandler

from jote.errors import ParseError
from jote.models import Entry

logger = logging.getLogger(__name__)

_handler = YAMLHandler()


def _split_front_matter(text: str) -> str | None:
    """Return the raw front matter block, or None if the note has none.

    Raises ParseError when the opening marker is never closed.
    """
    if not _handler.detect(text):
        return None
    try:
        block, _body = _handler.split(text)
    except ValueError:
        raise ParseError("unterminated metadata block") from None
    return block


def _scalar(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ParseError(f"'{key}' must be a single value")
    return str(value).strip()


def _tags(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError("'tags' must be a list")
    tags = []
    for item in value:
        tag = _scalar(item, "tags")
        if tag:
            tags.append(tag)
    return tags


def parse(data: bytes | str) -> Entry:
    """Parse a note's front matter into an ``Entry``.

    Missing keys (or a missing block) give an empty title / tag list.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"note is not valid UTF-8: {e}") from e
    else:
        text = data
    text = text.removeprefix("\ufeff")

    block = _split_front_matter(text)
    if block is None:
        return Entry()

    try:
        raw = _handler.load(block)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid metadata: {e}") from e
    if raw is None:
        return Entry()
    if not isinstance(raw, dict):
        raise ParseError("metadata block must be a mapping")

    return Entry(title=_scalar(raw.get("title"), "title"), tags=_tags(raw.get("tags")))


def parse_file(file_path: Path) -> Entry:
    """Read and parse a note file; the path is added to any ParseError."""
    data = Path(file_path).read_bytes()
    try:
        return parse(data)
    except ParseError as e:
        raise ParseError(f"could not parse {file_path}: {e}") from e
