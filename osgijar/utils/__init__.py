"""Utility modules for common operations."""

from osgijar.utils.atomic import atomic_write_bytes
from osgijar.utils.hashing import compute_sha256
from osgijar.utils.paths import ensure_dir, expand_globs

__all__ = [
    "atomic_write_bytes",
    "compute_sha256",
    "ensure_dir",
    "expand_globs",
]
