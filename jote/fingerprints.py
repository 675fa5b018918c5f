"""Content fingerprints used to detect whether an edit changed a note."""

from __future__ import annotations

from pathlib import Path

from blake3 import blake3

_CHUNK_SIZE = 65536


def fingerprint(data: bytes) -> str:
    """BLAKE3 digest of ``data`` as lowercase hex."""
    return blake3(data).hexdigest()


def fingerprint_file(file_path: Path) -> str:
    """BLAKE3 digest of a file's bytes.

    Read errors (e.g. the file vanished) propagate as ``OSError``.
    """
    h = blake3()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def changed(before: str, after: str) -> bool:
    return before != after
