"""CLI integration smoke tests."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from typer.testing import CliRunner

from osgijar import __version__
from osgijar.cli import app
from osgijar.utils.hashing import compute_sha256

runner = CliRunner()


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"osgijar version {__version__}" in result.stdout


def test_build_writes_archive(make_project, sample_configuration, override_settings) -> None:
    root = make_project(configuration=sample_configuration)

    result = runner.invoke(app, ["build"])

    assert result.exit_code == 0, result.output
    jar_path = root.resolve() / "build" / "my-widget-1.0.0.jar"
    assert jar_path.exists()
    assert f"Wrote {jar_path}" in result.stdout
    assert "Bundle: my-widget 1.0.0" in result.stdout
    assert "Files: 5" in result.stdout
    assert "Requires extender >= 1.1.0" in result.stdout


def test_build_json_output(make_project, override_settings) -> None:
    root = make_project(name="other")

    result = runner.invoke(app, ["-C", str(root), "build", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["schema_id"] == "jar_build"
    assert payload["schema_version"] == 1
    assert payload["producer"] == f"osgijar-{__version__}"
    datetime.fromisoformat(payload["produced_at"])
    assert Path(payload["output_path"]) == root.resolve() / "build" / "my-widget-1.0.0.jar"
    assert payload["minimum_extender_version"] is None
    assert "META-INF/MANIFEST.MF" in payload["entries"]


def test_no_compress_flag_stores_entries(make_project, override_settings) -> None:
    make_project()

    result = runner.invoke(app, ["--no-compress", "build"])

    assert result.exit_code == 0, result.output
    assert override_settings.compress is False


def test_manifest_command(make_project, override_settings) -> None:
    make_project(bundlerrc={"create-jar": {"web-context-path": "/widget"}})

    result = runner.invoke(app, ["manifest"])

    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "Manifest-Version: 1.0"
    assert "Web-ContextPath: /widget" in lines
    assert not (override_settings.get_project_dir() / "build" / "my-widget-1.0.0.jar").exists()


def test_inspect_lists_archive_entries(make_project, override_settings) -> None:
    root = make_project(build_files={"index.js": "1;\n", "css/app.css": "a{}\n"})
    assert runner.invoke(app, ["build"]).exit_code == 0
    jar_path = root / "build" / "my-widget-1.0.0.jar"

    result = runner.invoke(app, ["inspect", str(jar_path)])

    assert result.exit_code == 0, result.output
    assert "META-INF/resources/css/app.css" in result.stdout
    assert "3 file(s)" in result.stdout

    json_result = runner.invoke(app, ["inspect", str(jar_path), "--json"])

    payload = json.loads(json_result.stdout)
    assert payload["schema_id"] == "jar_entries"
    assert payload["sha256"] == compute_sha256(jar_path.read_bytes())
    assert [entry["path"] for entry in payload["entries"]] == [
        "META-INF/MANIFEST.MF",
        "META-INF/resources/css/app.css",
        "META-INF/resources/index.js",
    ]


def test_inspect_missing_archive(temp_dir: Path, override_settings) -> None:
    result = runner.invoke(app, ["inspect", str(temp_dir / "missing.jar")])

    assert result.exit_code == 1
    assert "Archive not found" in result.output


def test_build_without_project_fails(override_settings) -> None:
    result = runner.invoke(app, ["build"])

    assert result.exit_code == 1
    assert "package.json not found" in result.output


def test_build_with_bad_configuration_fails(make_project, override_settings) -> None:
    make_project(extra_files={"features/configuration.json": "{not json"})

    result = runner.invoke(app, ["build"])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_build_with_bad_jar_settings_fails(make_project, override_settings) -> None:
    make_project(bundlerrc={"create-jar": {"web-context-path": 7}})

    result = runner.invoke(app, ["build"])

    assert result.exit_code == 1
    assert "Error: Invalid create-jar settings" in result.output
