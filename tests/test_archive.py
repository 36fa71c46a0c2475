"""Tests for the archive tree, file packing and serialization."""

from __future__ import annotations

import asyncio
import io
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile

import pytest

from osgijar.jar.archive import JarArchive, add_files, read_entries
from osgijar.utils.paths import expand_globs


@pytest.fixture
def source_tree(temp_dir: Path) -> Path:
    src = temp_dir / "src"
    (src / "a").mkdir(parents=True)
    (src / "a" / "b.js").write_bytes(b"export default 1;\n")
    (src / "c.css").write_bytes(b"body { color: red; }\n")
    return src


def test_packing_preserves_relative_paths(source_tree: Path) -> None:
    archive = JarArchive()

    added = add_files(archive.folder("META-INF/resources"), source_tree, ["**/*"])

    assert added == ["a/b.js", "c.css"]
    assert archive.get("META-INF/resources/a/b.js") == (source_tree / "a" / "b.js").read_bytes()
    assert archive.get("META-INF/resources/c.css") == (source_tree / "c.css").read_bytes()


def test_serialized_archive_round_trip(source_tree: Path) -> None:
    archive = JarArchive()
    add_files(archive.folder("META-INF/resources"), source_tree, ["**/*"])

    with ZipFile(io.BytesIO(archive.generate())) as zf:
        names = zf.namelist()
        assert zf.read("META-INF/resources/a/b.js") == b"export default 1;\n"
        assert zf.read("META-INF/resources/c.css") == b"body { color: red; }\n"

    assert names == [
        "META-INF/",
        "META-INF/resources/",
        "META-INF/resources/a/",
        "META-INF/resources/a/b.js",
        "META-INF/resources/c.css",
    ]


def test_exclusion_only_matches_top_level_name(temp_dir: Path) -> None:
    src = temp_dir / "build"
    (src / "nested").mkdir(parents=True)
    (src / "app.jar").write_bytes(b"old archive")
    (src / "nested" / "app.jar").write_bytes(b"nested")
    (src / "main.js").write_bytes(b"main")

    matched = [str(p) for p in expand_globs(src, ["**/*", "!app.jar"])]

    assert matched == ["main.js", "nested/app.jar"]


def test_hidden_files_and_directories_skipped(temp_dir: Path) -> None:
    src = temp_dir / "build"
    (src / ".cache").mkdir(parents=True)
    (src / ".cache" / "x").write_text("x")
    (src / ".eslintrc").write_text("{}")
    (src / "index.js").write_text("1")

    assert [str(p) for p in expand_globs(src, ["**/*"])] == ["index.js"]
    assert [str(p) for p in expand_globs(src, ["**/*"], include_hidden=True)] == [
        ".cache/x",
        ".eslintrc",
        "index.js",
    ]


def test_missing_source_directory_matches_nothing(temp_dir: Path) -> None:
    assert expand_globs(temp_dir / "nope", ["**/*"]) == []


def test_last_write_wins_on_collision() -> None:
    archive = JarArchive()
    archive.file("features/metatype.json", "first")
    archive.file("META-INF/MANIFEST.MF", "manifest")
    archive.file("features/metatype.json", "second")

    assert archive.get("features/metatype.json") == b"second"
    assert archive.entries() == [
        "features/",
        "features/metatype.json",
        "META-INF/",
        "META-INF/MANIFEST.MF",
    ]


def test_folder_nodes_are_reused() -> None:
    archive = JarArchive()
    first = archive.folder("OSGI-INF/metatype")
    second = archive.insert_folder(["OSGI-INF", "metatype"])

    assert first is second


def test_empty_file_path_rejected() -> None:
    with pytest.raises(ValueError):
        JarArchive().file("", b"x")


def test_generate_is_deterministic(source_tree: Path) -> None:
    def build() -> bytes:
        archive = JarArchive()
        archive.file("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        add_files(archive.folder("META-INF/resources"), source_tree, ["**/*"])
        return archive.generate()

    assert build() == build()


def test_generate_async_matches_sync(source_tree: Path) -> None:
    archive = JarArchive()
    add_files(archive, source_tree, ["**/*"])

    assert asyncio.run(archive.generate_async()) == archive.generate()


@pytest.mark.parametrize(("compress", "expected"), [(True, ZIP_DEFLATED), (False, ZIP_STORED)])
def test_compression_setting(source_tree: Path, compress: bool, expected: int) -> None:
    archive = JarArchive()
    add_files(archive, source_tree, ["**/*"])

    with ZipFile(io.BytesIO(archive.generate(compress=compress))) as zf:
        assert zf.getinfo("c.css").compress_type == expected


def test_read_entries_lists_written_archive(temp_dir: Path, source_tree: Path) -> None:
    archive = JarArchive()
    add_files(archive, source_tree, ["**/*"])
    jar_path = temp_dir / "out.jar"
    jar_path.write_bytes(archive.generate())

    entries = read_entries(jar_path)

    files = [entry for entry in entries if not entry.is_dir]
    assert [entry.path for entry in files] == ["a/b.js", "c.css"]
    assert files[1].size == len(b"body { color: red; }\n")


def test_read_entries_from_bytes(source_tree: Path) -> None:
    archive = JarArchive()
    add_files(archive, source_tree, ["**/*"])

    entries = read_entries(archive.generate())

    assert [entry.path for entry in entries] == ["a/", "a/b.js", "c.css"]
    assert entries[0].is_dir
