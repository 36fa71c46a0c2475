"""Storage port interface for filesystem operations."""

from pathlib import Path
from typing import Protocol


class StoragePort(Protocol):
    """Port interface for storage operations.

    Abstracts output I/O to enable testing and alternative backends.

    Side effects: Writes files.
    """

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write a binary file, creating parent directories.

        Implementations must not leave a partially written file behind.

        Args:
            path: File path
            content: Content to write
        """
        ...
