"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .ddm import DDMPreferencesTransformer
from .storage import FileSystemStorageAdapter

__all__ = [
    "DDMPreferencesTransformer",
    "FileSystemStorageAdapter",
]
