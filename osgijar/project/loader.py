"""Load a :class:`ProjectDescriptor` from ``package.json`` and ``.npmbundlerrc``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from osgijar import __version__
from osgijar.project.model import (
    ExtenderSetting,
    JarSettings,
    L10nSettings,
    PackageInfo,
    ProjectDescriptor,
)

logger = logging.getLogger(__name__)

PACKAGE_JSON_FILENAME = "package.json"
BUNDLER_CONFIG_FILENAME = ".npmbundlerrc"

DEFAULT_BUILD_DIR = "build"
DEFAULT_CONFIGURATION_FILE = "features/configuration.json"
DEFAULT_LOCALIZATION_BASE = "features/localization/Language"
DEFAULT_MANIFEST_FILE = "features/manifest.json"


class ProjectConfigError(ValueError):
    """Raised when project files are malformed or inconsistent."""


def _read_json_object(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProjectConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ProjectConfigError(f"Expected a JSON object in {path}")
    return data


def _header_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _resolve_feature_file(
    root_dir: Path,
    configured: Any,
    default: str,
    *,
    probe_suffix: str = "",
) -> Path | None:
    """Resolve an optional feature path.

    An explicitly configured path is always honoured (a missing file then
    surfaces when it is read). The default path is only used when it exists.
    """
    if configured is False:
        return None
    if configured:
        return root_dir / str(configured)

    candidate = root_dir / default
    probe = candidate.with_name(candidate.name + probe_suffix) if probe_suffix else candidate
    if probe.exists():
        return candidate
    return None


def _extender_setting(features: dict[str, Any], jar_config: dict[str, Any]) -> ExtenderSetting:
    for source, key in (
        (features, "js-extender"),
        (jar_config, "require-js-extender"),
        (jar_config, "js-extender"),
    ):
        if key in source:
            value = source[key]
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value:
                return value
            raise ProjectConfigError(
                f"Invalid extender requirement {value!r}: use true, false, 'any' or a version"
            )
    return True


def _custom_headers(
    root_dir: Path,
    features: dict[str, Any],
    jar_config: dict[str, Any],
) -> dict[str, str]:
    headers: dict[str, str] = {}

    manifest_file = _resolve_feature_file(
        root_dir, features.get("manifest"), DEFAULT_MANIFEST_FILE
    )
    if manifest_file is not None:
        for key, value in _read_json_object(manifest_file).items():
            headers[key] = _header_value(value)

    inline = jar_config.get("custom-manifest-headers", {})
    if not isinstance(inline, dict):
        raise ProjectConfigError("custom-manifest-headers must be a JSON object")
    for key, value in inline.items():
        headers[key] = _header_value(value)

    return headers


def load_project(root_dir: Path, *, tool_version: str = __version__) -> ProjectDescriptor:
    """Build the project descriptor for ``root_dir``.

    Args:
        root_dir: Project root containing ``package.json``
        tool_version: Version embedded in the manifest ``Tool`` header

    Returns:
        Validated, read-only project descriptor

    Raises:
        FileNotFoundError: If ``package.json`` is missing
        ProjectConfigError: If project files are malformed
    """
    root = Path(root_dir).resolve()
    package_path = root / PACKAGE_JSON_FILENAME
    if not package_path.exists():
        raise FileNotFoundError(f"{PACKAGE_JSON_FILENAME} not found in {root}")

    pkg_json = _read_json_object(package_path)
    try:
        package = PackageInfo(
            name=pkg_json.get("name", ""),
            version=pkg_json.get("version", ""),
            description=pkg_json.get("description") or None,
        )
    except ValidationError as exc:
        raise ProjectConfigError(f"Invalid {package_path}: {exc}") from exc

    rc_path = root / BUNDLER_CONFIG_FILENAME
    bundler_config = _read_json_object(rc_path) if rc_path.exists() else {}

    jar_config = bundler_config.get("create-jar", True)
    if jar_config is False:
        raise ProjectConfigError(f"Jar creation is disabled in {rc_path}")
    if jar_config is True:
        jar_config = {}
    if not isinstance(jar_config, dict):
        raise ProjectConfigError("create-jar must be true, false or a JSON object")

    features = jar_config.get("features", {})
    if not isinstance(features, dict):
        raise ProjectConfigError("create-jar.features must be a JSON object")

    build_dir = root / str(bundler_config.get("output", DEFAULT_BUILD_DIR))
    output_dir = root / str(jar_config["output-dir"]) if "output-dir" in jar_config else build_dir

    web_context_path = (
        jar_config.get("web-context-path")
        or jar_config.get("context-path")
        or f"/{package.name}-{package.version}"
    )

    custom_headers = _custom_headers(root, features, jar_config)
    extender_setting = _extender_setting(features, jar_config)
    configuration_file = _resolve_feature_file(
        root, features.get("configuration"), DEFAULT_CONFIGURATION_FILE
    )
    language_file_base_name = _resolve_feature_file(
        root,
        features.get("localization"),
        DEFAULT_LOCALIZATION_BASE,
        probe_suffix=".properties",
    )

    try:
        jar = JarSettings(
            output_dir=output_dir,
            output_filename=jar_config.get(
                "output-filename", f"{package.name}-{package.version}.jar"
            ),
            web_context_path=web_context_path,
            custom_manifest_headers=custom_headers,
            require_js_extender=extender_setting,
            configuration_file=configuration_file,
        )
        l10n = L10nSettings(language_file_base_name=language_file_base_name)
    except ValidationError as exc:
        raise ProjectConfigError(f"Invalid create-jar settings in {rc_path}: {exc}") from exc

    logger.debug(
        "Loaded project %s@%s (build dir %s, output %s)",
        package.name,
        package.version,
        build_dir,
        jar.output_path,
    )

    return ProjectDescriptor(
        root_dir=root,
        build_dir=build_dir,
        package=package,
        jar=jar,
        l10n=l10n,
        tool_version=tool_version,
    )
