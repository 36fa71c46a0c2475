"""Pytest configuration and fixtures."""

import json
import shutil
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from osgijar.config import Settings

ProjectFactory = Callable[..., Path]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _write_files(root: Path, files: dict[str, str | bytes]) -> None:
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")


@pytest.fixture
def make_project(temp_dir: Path) -> ProjectFactory:
    """Return a factory that lays out a bundler project on disk.

    Keyword arguments:
        package: package.json contents (defaults to my-widget 1.0.0)
        bundlerrc: .npmbundlerrc contents (omitted when None)
        build_files: files written under ``build/``
        configuration: features/configuration.json contents
        localization: files written under ``features/localization/``
        extra_files: files written relative to the project root
    """

    def factory(
        *,
        name: str = "project",
        package: dict[str, Any] | None = None,
        bundlerrc: dict[str, Any] | None = None,
        build_files: dict[str, str | bytes] | None = None,
        configuration: dict[str, Any] | None = None,
        localization: dict[str, str | bytes] | None = None,
        extra_files: dict[str, str | bytes] | None = None,
    ) -> Path:
        root = temp_dir / name
        root.mkdir(parents=True, exist_ok=True)

        _write_json(
            root / "package.json",
            package
            if package is not None
            else {"name": "my-widget", "version": "1.0.0", "description": "My Widget"},
        )

        if bundlerrc is not None:
            _write_json(root / ".npmbundlerrc", bundlerrc)

        build_dir = root / "build"
        build_dir.mkdir(exist_ok=True)
        _write_files(build_dir, build_files or {"index.js": "console.log('hi');\n"})

        if configuration is not None:
            _write_json(root / "features" / "configuration.json", configuration)

        if localization is not None:
            _write_files(root / "features" / "localization", localization)

        if extra_files:
            _write_files(root, extra_files)

        return root

    return factory


@pytest.fixture
def sample_configuration() -> dict[str, Any]:
    """Configuration with both system and portlet instance descriptors."""
    return {
        "system": {
            "category": "widgets",
            "name": "Widget settings",
            "fields": {
                "api-url": {
                    "type": "string",
                    "name": "API URL",
                    "description": "Backend endpoint",
                    "default": "https://example.com",
                    "required": True,
                },
                "retries": {"type": "number", "default": 3},
            },
        },
        "portletInstance": {
            "fields": {
                "show-title": {"type": "boolean", "name": "Show title", "default": True},
                "color": {
                    "type": "string",
                    "name": "Color",
                    "options": {"red": "Red", "blue": "Blue"},
                },
            },
        },
    }


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated osgijar settings scoped to tests."""

    import osgijar.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    settings = config_module.Settings(project_dir=temp_dir / "project")
    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings
