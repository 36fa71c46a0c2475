"""Configuration management with Pydantic settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    """osgijar tool settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    Project-specific settings (package metadata, jar layout) live in the
    project's own files and are loaded by :mod:`osgijar.project`.
    """

    model_config = SettingsConfigDict(
        env_prefix="OSGIJAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    project_dir: Path | None = Field(
        default=None,
        description="Project root containing package.json (defaults to the working directory)",
    )

    log_level: LogLevel = Field(
        default="WARNING",
        description="Root log level used by the CLI",
    )

    compress: bool = Field(
        default=True,
        description="Deflate archive entries (store them uncompressed when False)",
    )

    def get_project_dir(self) -> Path:
        """Return the resolved project directory."""
        if self.project_dir is not None:
            return Path(self.project_dir).expanduser().resolve()
        return Path.cwd().resolve()


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
