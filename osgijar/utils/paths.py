"""Path utilities for directory and file operations."""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def _is_hidden(relative: PurePosixPath) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def expand_globs(
    root: Path,
    patterns: Iterable[str],
    *,
    include_hidden: bool = False,
) -> list[PurePosixPath]:
    """Expand POSIX glob patterns relative to ``root``.

    Patterns prefixed with ``!`` exclude previously matched paths; they are
    matched against the whole relative path, so ``!app.jar`` only drops a
    top-level ``app.jar``. Directories are never returned. Hidden entries
    (any segment starting with a dot) are skipped unless ``include_hidden``.

    Args:
        root: Directory the patterns are relative to
        patterns: Include and ``!``-prefixed exclude patterns
        include_hidden: Match dot-files and dot-directories too

    Returns:
        Sorted relative POSIX paths of matched files
    """
    if not root.is_dir():
        return []

    includes: list[str] = []
    excludes: list[str] = []
    for pattern in patterns:
        if pattern.startswith("!"):
            excludes.append(pattern[1:])
        else:
            includes.append(pattern)

    matches: set[PurePosixPath] = set()
    for pattern in includes:
        for path in root.glob(pattern):
            if not path.is_file():
                continue
            relative = PurePosixPath(path.relative_to(root).as_posix())
            if not include_hidden and _is_hidden(relative):
                continue
            matches.add(relative)

    return sorted(
        relative
        for relative in matches
        if not any(fnmatchcase(str(relative), exclude) for exclude in excludes)
    )
