"""External editor collaborator."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

# Runs an editor on a path, blocks until it exits, and returns its exit status.
Editor = Callable[[Path], int]


class SubprocessEditor:
    """Launch a configured editor command with the note path appended last.

    The editor inherits this process's standard streams and environment.
    """

    def __init__(self, command: list[str]):
        if not command:
            raise ValueError("editor command must not be empty")
        self.command = list(command)

    def __call__(self, path: Path) -> int:
        args = [*self.command, str(path)]
        logger.debug(f"Launching editor: {' '.join(args)}")
        result = subprocess.run(args, env=os.environ.copy())
        return result.returncode
