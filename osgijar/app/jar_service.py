"""Jar service for OSGi bundle creation.

Assembles the bundle archive from a project's build output, localization
files and configuration descriptors, then writes it in one step.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import BaseModel

from osgijar.app.ports import PreferencesTransformerPort, StoragePort
from osgijar.jar.archive import JarArchive, add_files
from osgijar.jar.configuration import (
    ConfigurationJson,
    get_portlet_instance_configuration,
    get_system_configuration,
    load_configuration,
)
from osgijar.jar.localization import add_localization_files, localization_reference
from osgijar.jar.manifest import (
    build_manifest_headers,
    format_manifest,
    resolve_minimum_extender_version,
)
from osgijar.jar.metatype import build_metatype
from osgijar.project.model import ProjectDescriptor
from osgijar.utils.hashing import compute_sha256

logger = logging.getLogger(__name__)

MANIFEST_PATH = "META-INF/MANIFEST.MF"
RESOURCES_DIR = "META-INF/resources"
METATYPE_DIR = "OSGI-INF/metatype"
FEATURES_DIR = "features"
METATYPE_JSON_NAME = "metatype.json"
PORTLET_PREFERENCES_NAME = "portlet_preferences.json"


class JarResult(BaseModel):
    """Summary of a written bundle archive."""

    output_path: Path
    symbolic_name: str
    version: str
    entries: list[str]
    size: int
    sha256: str
    minimum_extender_version: str | None
    system_configuration: bool
    portlet_preferences: bool
    localization: bool


class JarService:
    """Orchestrates bundle archive creation for one project.

    Output I/O is delegated to the storage port and portlet preference
    conversion to the preferences transformer port.
    """

    def __init__(
        self,
        project: ProjectDescriptor,
        storage_port: StoragePort,
        preferences_port: PreferencesTransformerPort,
        *,
        compress: bool = True,
    ) -> None:
        """Initialize jar service.

        Args:
            project: Project descriptor to package
            storage_port: Filesystem operations port
            preferences_port: Portlet preferences transformer
            compress: Deflate archive entries
        """
        self.project = project
        self.storage = storage_port
        self.preferences = preferences_port
        self.compress = compress

    def load_configuration(self) -> ConfigurationJson:
        """Read the project's configuration file (empty when none)."""
        return load_configuration(self.project.jar.configuration_file)

    def minimum_extender_version(self, configuration: ConfigurationJson) -> str | None:
        return resolve_minimum_extender_version(
            self.project.jar.require_js_extender,
            system_present=get_system_configuration(configuration) is not None,
            portlet_present=get_portlet_instance_configuration(configuration) is not None,
        )

    def render_manifest(self, configuration: ConfigurationJson | None = None) -> str:
        """Return the manifest text for the project without building anything."""
        if configuration is None:
            configuration = self.load_configuration()

        project = self.project
        headers = build_manifest_headers(
            project.package,
            tool_version=project.tool_version,
            web_context_path=project.jar.web_context_path,
            localization_bundle_name=project.l10n.bundle_name,
            extender_setting=project.jar.require_js_extender,
            minimum_extender_version=self.minimum_extender_version(configuration),
            custom_headers=project.jar.custom_manifest_headers,
        )
        return format_manifest(headers)

    def assemble(self, configuration: ConfigurationJson | None = None) -> JarArchive:
        """Build the in-memory archive tree.

        Stages run in a fixed order so later stages overwrite paths that an
        earlier stage also produced.
        """
        if configuration is None:
            configuration = self.load_configuration()

        archive = JarArchive()

        self._add_manifest(archive, configuration)
        self._add_build_files(archive)
        self._add_localization_files(archive)
        self._add_system_configuration_files(archive, configuration)
        self._add_portlet_instance_configuration_file(archive, configuration)

        return archive

    async def create_jar_async(self) -> JarResult:
        """Assemble, serialize and write the bundle archive.

        Raises:
            FileNotFoundError: If a configured input file is missing
            ConfigurationFileError: If the configuration file is malformed
            OSError: If the archive cannot be written
        """
        configuration = self.load_configuration()
        archive = self.assemble(configuration)

        buffer = await archive.generate_async(compress=self.compress)

        output_path = self.project.jar.output_path
        self.storage.write_bytes(output_path, buffer)

        logger.info("Wrote %s (%d bytes)", output_path, len(buffer))

        return JarResult(
            output_path=output_path,
            symbolic_name=self.project.package.name,
            version=self.project.package.version,
            entries=archive.entries(),
            size=len(buffer),
            sha256=compute_sha256(buffer),
            minimum_extender_version=self.minimum_extender_version(configuration),
            system_configuration=get_system_configuration(configuration) is not None,
            portlet_preferences=get_portlet_instance_configuration(configuration) is not None,
            localization=self.project.l10n.supported,
        )

    def create_jar(self) -> JarResult:
        """Synchronous entry point around :meth:`create_jar_async`."""
        return asyncio.run(self.create_jar_async())

    def _add_manifest(self, archive: JarArchive, configuration: ConfigurationJson) -> None:
        archive.file(MANIFEST_PATH, self.render_manifest(configuration))

    def _add_build_files(self, archive: JarArchive) -> None:
        build_dir = self.project.build_dir
        if not build_dir.is_dir():
            raise FileNotFoundError(f"Build directory not found: {build_dir}")

        added = add_files(
            archive.folder(RESOURCES_DIR),
            build_dir,
            ["**/*", f"!{self.project.jar.output_filename}"],
        )
        logger.info("Packed %d build file(s) from %s", len(added), build_dir)

    def _add_localization_files(self, archive: JarArchive) -> None:
        add_localization_files(archive, self.project.l10n)

    def _add_system_configuration_files(
        self, archive: JarArchive, configuration: ConfigurationJson
    ) -> None:
        section = get_system_configuration(configuration)
        if section is None:
            logger.debug("No system configuration; skipping metatype")
            return

        package = self.project.package
        files = build_metatype(package, section, localization_reference(self.project.l10n))

        archive.file(f"{METATYPE_DIR}/{package.name}.xml", files.xml)
        archive.file(f"{FEATURES_DIR}/{METATYPE_JSON_NAME}", files.json)

    def _add_portlet_instance_configuration_file(
        self, archive: JarArchive, configuration: ConfigurationJson
    ) -> None:
        section = get_portlet_instance_configuration(configuration)
        if section is None:
            logger.debug("No portlet instance configuration; skipping preferences")
            return

        document = self.preferences.transform(self.project, section)
        archive.file(
            f"{FEATURES_DIR}/{PORTLET_PREFERENCES_NAME}",
            json.dumps(document, indent=2, ensure_ascii=False),
        )
