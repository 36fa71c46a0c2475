"""Configuration descriptors read from the project's configuration file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ConfigurationFileError(ValueError):
    """Raised when the configuration file cannot be parsed."""


def _as_text(value: Any) -> str | None:
    """Keep strings as they are and render any other JSON value as JSON text."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


class FieldDescription(BaseModel):
    """Description of one configurable field.

    Only the keys read by the metatype and preferences writers are declared;
    anything else is kept as extra data. Text values (names, types,
    option labels) given as other JSON values are kept as their JSON text.
    """

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    name: str | None = None
    description: str | None = None
    default: Any = None
    required: bool | None = None
    repeatable: bool | None = None
    options: dict[str, str] | None = None

    @field_validator("type", "name", "description", mode="before")
    @classmethod
    def _scalar_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("required", "repeatable", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "on", "1")
        return bool(value)

    @field_validator("options", mode="before")
    @classmethod
    def _option_labels(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(key): "" if label is None else _as_text(label) for key, label in value.items()}


class ConfigurationSection(BaseModel):
    """A named, field-keyed configuration record."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    category: str | None = None
    fields: dict[str, FieldDescription] = Field(default_factory=dict)

    @field_validator("name", "category", mode="before")
    @classmethod
    def _scalar_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("fields", mode="before")
    @classmethod
    def _null_fields(cls, value: Any) -> Any:
        return {} if value is None else value


class ConfigurationJson(BaseModel):
    """Top-level shape of ``configuration.json``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    system: ConfigurationSection | None = None
    portlet_instance: ConfigurationSection | None = Field(default=None, alias="portletInstance")


def is_present(section: ConfigurationSection | None) -> bool:
    """Return True when ``section`` exists and declares at least one field."""
    return section is not None and len(section.fields) > 0


def load_configuration(path: Path | None) -> ConfigurationJson:
    """Read and parse the configuration file once.

    Args:
        path: Configuration file path, or None when the project has none

    Returns:
        Parsed configuration (empty when ``path`` is None)

    Raises:
        FileNotFoundError: If a configured file does not exist
        ConfigurationFileError: If the file is not valid JSON or has a bad shape
    """
    if path is None:
        return ConfigurationJson()

    config_path = Path(path)
    text = config_path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationFileError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationFileError(f"Expected a JSON object in {config_path}")

    try:
        configuration = ConfigurationJson.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationFileError(f"Invalid configuration in {config_path}: {exc}") from exc

    logger.debug(
        "Read configuration %s (system=%s, portletInstance=%s)",
        config_path,
        is_present(configuration.system),
        is_present(configuration.portlet_instance),
    )
    return configuration


def get_system_configuration(configuration: ConfigurationJson) -> ConfigurationSection | None:
    """Return the system descriptor, or None when absent."""
    if not is_present(configuration.system):
        return None
    return configuration.system


def get_portlet_instance_configuration(
    configuration: ConfigurationJson,
) -> ConfigurationSection | None:
    """Return the portlet-instance descriptor, or None when absent."""
    if not is_present(configuration.portlet_instance):
        return None
    return configuration.portlet_instance
