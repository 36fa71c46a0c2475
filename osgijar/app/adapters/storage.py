"""Filesystem-backed storage port implementation."""

from __future__ import annotations

from pathlib import Path

from osgijar.app.ports import StoragePort
from osgijar.utils.atomic import atomic_write_bytes


class FileSystemStorageAdapter(StoragePort):
    """Adapter that performs direct filesystem operations."""

    def write_bytes(self, path: Path, content: bytes) -> None:
        atomic_write_bytes(Path(path), content)
