"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from osgijar.app import JarService
from osgijar.app.adapters import DDMPreferencesTransformer, FileSystemStorageAdapter
from osgijar.app.ports import PreferencesTransformerPort, StoragePort
from osgijar.config import Settings, get_settings
from osgijar.project import ProjectDescriptor, load_project


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    project: ProjectDescriptor
    storage_port: StoragePort
    preferences_port: PreferencesTransformerPort
    jar_service: JarService


def bootstrap_application(
    settings: Settings | None = None,
    *,
    project_dir: Path | None = None,
    storage_port: StoragePort | None = None,
    preferences_port: PreferencesTransformerPort | None = None,
) -> ApplicationContainer:
    """Create the application container for a project.

    Args:
        settings: Tool settings (defaults to the global settings)
        project_dir: Project root overriding ``settings.project_dir``
        storage_port: Storage adapter override (tests)
        preferences_port: Preferences transformer override (tests)

    Raises:
        FileNotFoundError: If the project has no ``package.json``
        ProjectConfigError: If project files are malformed
    """
    active_settings = settings or get_settings()
    root = Path(project_dir) if project_dir is not None else active_settings.get_project_dir()

    project = load_project(root)
    storage = storage_port or FileSystemStorageAdapter()
    preferences = preferences_port or DDMPreferencesTransformer()

    jar_service = JarService(
        project,
        storage,
        preferences,
        compress=active_settings.compress,
    )

    return ApplicationContainer(
        settings=active_settings,
        project=project,
        storage_port=storage,
        preferences_port=preferences,
        jar_service=jar_service,
    )
