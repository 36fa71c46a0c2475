"""Port for portlet preference transformation."""

from __future__ import annotations

from typing import Any, Protocol

from osgijar.jar.configuration import ConfigurationSection
from osgijar.project.model import ProjectDescriptor


class PreferencesTransformerPort(Protocol):
    """Converts a portlet-instance descriptor into a preferences document."""

    def transform(
        self,
        project: ProjectDescriptor,
        section: ConfigurationSection,
    ) -> dict[str, Any]:
        """Return the JSON-serializable preferences document for ``section``."""
        ...
