"""Jar building blocks: manifest, metatype, localization and archive tree."""

from osgijar.jar.archive import ArchiveEntry, ArchiveFolder, JarArchive, add_files, read_entries
from osgijar.jar.configuration import (
    ConfigurationFileError,
    ConfigurationJson,
    ConfigurationSection,
    FieldDescription,
    get_portlet_instance_configuration,
    get_system_configuration,
    is_present,
    load_configuration,
)
from osgijar.jar.localization import add_localization_files, localization_reference
from osgijar.jar.manifest import (
    build_manifest_headers,
    format_manifest,
    resolve_minimum_extender_version,
)
from osgijar.jar.metatype import MetatypeFiles, build_metatype

__all__ = [
    "ArchiveEntry",
    "ArchiveFolder",
    "ConfigurationFileError",
    "ConfigurationJson",
    "ConfigurationSection",
    "FieldDescription",
    "JarArchive",
    "MetatypeFiles",
    "add_files",
    "add_localization_files",
    "build_manifest_headers",
    "build_metatype",
    "format_manifest",
    "get_portlet_instance_configuration",
    "get_system_configuration",
    "is_present",
    "load_configuration",
    "localization_reference",
    "read_entries",
    "resolve_minimum_extender_version",
]
