"""In-memory archive tree and deterministic ZIP serialization."""

from __future__ import annotations

import asyncio
import io
import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

from osgijar.utils.paths import expand_globs

logger = logging.getLogger(__name__)

# Fixed entry timestamp so identical inputs give identical archives
ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o100644 << 16
_DIR_MODE = (0o040755 << 16) | 0x10


class ArchiveFolder:
    """A folder node in the archive tree.

    Children are kept in insertion order; writing a file over an existing
    entry replaces its content in place (last write wins).
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.children: dict[str, ArchiveFolder | bytes] = {}

    def folder(self, path: str) -> ArchiveFolder:
        """Return the sub-folder at ``path``, creating missing nodes."""
        return self.insert_folder(_split(path))

    def insert_folder(self, segments: Sequence[str]) -> ArchiveFolder:
        """Walk ``segments`` from this node, creating folders on demand."""
        node = self
        for segment in segments:
            child = node.children.get(segment)
            if not isinstance(child, ArchiveFolder):
                child = ArchiveFolder(segment)
                node.children[segment] = child
            node = child
        return node

    def file(self, path: str, content: bytes | str) -> None:
        """Write a file at ``path`` relative to this folder."""
        segments = _split(path)
        if not segments:
            raise ValueError("Archive file path must not be empty")
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        self.insert_folder(segments[:-1]).children[segments[-1]] = data

    def walk(self, prefix: str = "") -> Iterator[tuple[str, bytes | None]]:
        """Yield ``(path, content)`` pairs depth first; folders carry None."""
        for name, child in self.children.items():
            path = f"{prefix}{name}"
            if isinstance(child, ArchiveFolder):
                yield f"{path}/", None
                yield from child.walk(f"{path}/")
            else:
                yield path, child

    def get(self, path: str) -> bytes | None:
        """Return the content of the file at ``path``, if present."""
        node: ArchiveFolder | bytes = self
        for segment in _split(path):
            if not isinstance(node, ArchiveFolder) or segment not in node.children:
                return None
            node = node.children[segment]
        return node if isinstance(node, bytes) else None


def _split(path: str) -> list[str]:
    return [segment for segment in path.replace("\\", "/").split("/") if segment]


class JarArchive(ArchiveFolder):
    """Root of an archive being assembled for a single build."""

    def entries(self) -> list[str]:
        """List every entry path in serialization order."""
        return [path for path, _ in self.walk()]

    def generate(self, *, compress: bool = True) -> bytes:
        """Serialize the tree to ZIP bytes."""
        compress_type = ZIP_DEFLATED if compress else ZIP_STORED
        buffer = io.BytesIO()

        with ZipFile(buffer, "w") as archive:
            for path, content in self.walk():
                info = ZipInfo(path, date_time=ENTRY_DATE_TIME)
                info.create_system = 3
                if content is None:
                    info.external_attr = _DIR_MODE
                    archive.writestr(info, b"")
                else:
                    info.external_attr = _FILE_MODE
                    info.compress_type = compress_type
                    archive.writestr(info, content)

        return buffer.getvalue()

    async def generate_async(self, *, compress: bool = True) -> bytes:
        """Serialize the tree off the event loop."""
        return await asyncio.to_thread(self.generate, compress=compress)


@dataclass(slots=True, frozen=True)
class ArchiveEntry:
    """Listing record for an entry of a written archive."""

    path: str
    size: int
    compressed_size: int
    crc: int

    @property
    def is_dir(self) -> bool:
        return self.path.endswith("/")


def read_entries(source: Path | bytes) -> list[ArchiveEntry]:
    """List the entries of an archive, given its path or its bytes, in stored order."""
    with ZipFile(io.BytesIO(source) if isinstance(source, bytes) else source) as archive:
        return [
            ArchiveEntry(
                path=info.filename,
                size=info.file_size,
                compressed_size=info.compress_size,
                crc=info.CRC,
            )
            for info in archive.infolist()
        ]


def add_files(
    destination: ArchiveFolder,
    source_dir: Path,
    patterns: Iterable[str],
) -> list[str]:
    """Add files matching ``patterns`` under ``source_dir`` to ``destination``.

    Args:
        destination: Archive folder receiving the files
        source_dir: Directory the patterns are relative to
        patterns: POSIX globs; ``!`` prefixed patterns exclude

    Returns:
        Relative POSIX paths that were added, in insertion order
    """
    source = Path(source_dir)
    added: list[str] = []

    for relative in expand_globs(source, patterns):
        parts = relative.parts
        folder = destination.insert_folder(parts[:-1])
        folder.children[parts[-1]] = (source / Path(*parts)).read_bytes()
        added.append(str(relative))

    logger.debug("Added %d file(s) from %s", len(added), source)
    return added
