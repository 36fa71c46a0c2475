"""Localization resource bundling and language file access."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from osgijar.jar.archive import ArchiveFolder, add_files
from osgijar.project.model import L10nSettings

logger = logging.getLogger(__name__)

CONTENT_DIR = "content"
DEFAULT_LOCALE = "en_US"
PROPERTIES_SUFFIX = ".properties"


def localization_reference(l10n: L10nSettings) -> str | None:
    """Resource bundle base path inside the archive (``content/Language``)."""
    if not l10n.supported:
        return None
    return f"{CONTENT_DIR}/{l10n.bundle_name}"


def add_localization_files(root: ArchiveFolder, l10n: L10nSettings) -> list[str]:
    """Copy every file of the localization directory under ``content/``.

    No-op when localization is not configured.
    """
    if l10n.directory is None:
        return []

    added = add_files(root.folder(CONTENT_DIR), l10n.directory, ["**/*"])
    logger.debug("Bundled %d localization file(s) from %s", len(added), l10n.directory)
    return added


_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)")
_CONTROL_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _unescape(value: str) -> str:
    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if len(token) == 5:
            return chr(int(token[1:], 16))
        return _CONTROL_ESCAPES.get(token, token)

    return _ESCAPE.sub(replace, value)


def _backslashes_before(line: str, index: int) -> int:
    return index - len(line[:index].rstrip("\\"))


def load_properties(path: Path) -> dict[str, str]:
    """Parse a Java ``.properties`` file.

    Supports ``=``/``:`` separators, ``#``/``!`` comments, line continuations
    and ``\\uXXXX`` escapes, which is what language bundles use.
    """
    properties: dict[str, str] = {}
    pending = ""

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = pending + raw_line.lstrip()
        pending = ""

        if not line or line[0] in "#!":
            continue

        trailing = _backslashes_before(line, len(line))
        if trailing % 2 == 1:
            pending = line[:-1]
            continue

        key_end = len(line)
        for index, char in enumerate(line):
            if char in "=:" or char.isspace():
                if _backslashes_before(line, index) % 2 == 0:
                    key_end = index
                    break

        key = line[:key_end]
        rest = line[key_end:].lstrip()
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip()
        properties[_unescape(key)] = _unescape(rest)

    if pending:
        logger.debug("Dangling line continuation at end of %s", path)

    return properties


def available_locales(l10n: L10nSettings) -> dict[str, Path]:
    """Map locale ids to language files, default locale first.

    ``Language.properties`` is the default (``en_US``) bundle and
    ``Language_es_ES.properties`` provides ``es_ES``.
    """
    base = l10n.language_file_base_name
    if base is None:
        return {}

    locales: dict[str, Path] = {}
    default_file = base.with_name(base.name + PROPERTIES_SUFFIX)
    if default_file.exists():
        locales[DEFAULT_LOCALE] = default_file

    prefix = f"{base.name}_"
    for path in sorted(base.parent.glob(f"{prefix}*{PROPERTIES_SUFFIX}")):
        locale = path.name[len(prefix) : -len(PROPERTIES_SUFFIX)]
        if locale and locale not in locales:
            locales[locale] = path

    return locales
