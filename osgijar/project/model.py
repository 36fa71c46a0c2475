"""Read-only project descriptor consumed by the jar builder."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# False disables the requirement, "any" drops the version constraint,
# True computes it and any other string is an explicit version.
ExtenderSetting = bool | str


class PackageInfo(BaseModel):
    """Subset of ``package.json`` used for bundle identity."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)
    description: str | None = None


class JarSettings(BaseModel):
    """Archive output settings."""

    model_config = ConfigDict(frozen=True)

    output_dir: Path
    output_filename: str
    web_context_path: str
    custom_manifest_headers: dict[str, str] = Field(default_factory=dict)
    require_js_extender: ExtenderSetting = True
    configuration_file: Path | None = None

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_filename


class L10nSettings(BaseModel):
    """Localization settings.

    ``language_file_base_name`` points at the default language file without
    its ``.properties`` extension, e.g. ``features/localization/Language``.
    """

    model_config = ConfigDict(frozen=True)

    language_file_base_name: Path | None = None

    @property
    def supported(self) -> bool:
        return self.language_file_base_name is not None

    @property
    def bundle_name(self) -> str | None:
        """Base name of the language bundle (``Language``), if configured."""
        if self.language_file_base_name is None:
            return None
        return self.language_file_base_name.name

    @property
    def directory(self) -> Path | None:
        if self.language_file_base_name is None:
            return None
        return self.language_file_base_name.parent


class ProjectDescriptor(BaseModel):
    """Everything the jar builder needs to know about a project."""

    model_config = ConfigDict(frozen=True)

    root_dir: Path
    build_dir: Path
    package: PackageInfo
    jar: JarSettings
    l10n: L10nSettings = Field(default_factory=L10nSettings)
    tool_version: str
