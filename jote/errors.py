"""Domain exceptions for jote."""

from __future__ import annotations


class JoteError(Exception):
    """Base exception for all jote failures."""


class StoreInitError(JoteError):
    """The note store repository could not be opened or created."""


class ParseError(JoteError):
    """A note's metadata block is malformed."""


class EditorError(JoteError):
    """The external editor failed to launch or exited non-zero."""


class CommitError(JoteError):
    """Staging, status, rename, or commit failed in the version store."""


class ConfigError(JoteError):
    """Invalid settings file or setting value."""
