"""Archive digest helper."""

import hashlib


def compute_sha256(content: bytes) -> str:
    """Hex SHA-256 digest of in-memory content such as a serialized archive."""
    return hashlib.sha256(content).hexdigest()
