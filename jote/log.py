"""Logging setup and terminal helpers for jote."""

import logging
import os
import sys
from pathlib import Path

_RESET = "\033[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def _color_enabled(stream) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


class ColorFormatter(logging.Formatter):
    """Prefix warnings and errors with their level, coloured when allowed."""

    def __init__(self, use_color: bool):
        super().__init__("%(message)s")
        self._use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            message = f"{record.levelname}: {message}"
        if not self._use_color:
            return message
        color = _LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{message}{_RESET}" if color else message


def configure_logging(
    stream_level: int = logging.INFO,
    ignore_libs: list[str] | None = None,
) -> None:
    """Send jote log records to stderr at ``stream_level``."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(stream_level)
    handler.setFormatter(ColorFormatter(_color_enabled(sys.stderr)))
    root.addHandler(handler)
    root.setLevel(stream_level)

    for lib in ignore_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)


def clickable_path(path: Path) -> str:
    """Render ``path`` as an OSC-8 terminal hyperlink.

    Falls back to plain text when ``NO_COLOR`` is set.
    """
    resolved = Path(path).resolve()
    label = f"FILE {resolved}"
    if os.environ.get("NO_COLOR"):
        return label
    return f"\033]8;;{resolved.as_uri()}\033\\{label}\033]8;;\033\\"
