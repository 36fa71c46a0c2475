"""File writing helpers with all-or-nothing semantics."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from osgijar.utils.paths import ensure_dir


def atomic_write_bytes(path: Path, content: bytes) -> None:
    """Write ``content`` to ``path`` atomically.

    The write is performed via a temporary file in the destination directory
    followed by an ``os.replace`` once the contents are flushed and fsynced,
    so readers never observe a partially written file. The destination
    directory is created when missing.
    """
    destination = Path(path)
    ensure_dir(destination.parent)

    fd: int | None = None
    tmp_path: str | None = None

    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(destination.parent),
            prefix=destination.name,
            suffix=".tmp",
        )

        with os.fdopen(fd, "wb") as handle:
            fd = None  # Ownership transferred to file object
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(tmp_path, destination)
        tmp_path = None
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
