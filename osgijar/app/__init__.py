"""Application layer services."""

from osgijar.app.jar_service import JarResult, JarService

__all__ = ["JarResult", "JarService"]
