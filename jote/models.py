"""Core data models for jote.

``Entry`` is the parsed metadata of a note, ``CommitResult`` describes what
the version store recorded, and ``ReviewOutcome`` is what one pass through
the editor produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


@dataclass(frozen=True)
class Entry:
    """Title and tags from a note's front matter."""

    title: str = ""
    tags: list[str] = field(default_factory=list)


class FileStatus(Enum):
    UNTRACKED = auto()
    TRACKED = auto()


class CommitKind(Enum):
    ADD = auto()
    UNTRACKED_RENAME = auto()
    MOVE = auto()


@dataclass(frozen=True)
class CommitResult:
    kind: CommitKind
    path: str
    message: str
    old_path: str = ""


class ReviewAction(Enum):
    ABANDONED = auto()  # new note closed without edits, file removed
    UNCHANGED = auto()  # existing note viewed but not edited
    COMMITTED = auto()


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of handing one note to the editor."""

    action: ReviewAction
    path: str
    commit: CommitResult | None = None

    @property
    def committed(self) -> bool:
        return self.action is ReviewAction.COMMITTED
