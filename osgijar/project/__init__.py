"""Project model and loader for bundler-managed front-end projects."""

from osgijar.project.loader import (
    BUNDLER_CONFIG_FILENAME,
    PACKAGE_JSON_FILENAME,
    ProjectConfigError,
    load_project,
)
from osgijar.project.model import (
    ExtenderSetting,
    JarSettings,
    L10nSettings,
    PackageInfo,
    ProjectDescriptor,
)

__all__ = [
    "BUNDLER_CONFIG_FILENAME",
    "PACKAGE_JSON_FILENAME",
    "ExtenderSetting",
    "JarSettings",
    "L10nSettings",
    "PackageInfo",
    "ProjectConfigError",
    "ProjectDescriptor",
    "load_project",
]
