"""osgijar - Package front-end build output as OSGi bundle archives.

Turns a project's build directory, localization files and configuration
descriptors into a deployable JAR with capability metadata.
"""

__version__ = "0.1.0"
__author__ = "osgijar Contributors"

from osgijar.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
