"""Port interfaces for the osgijar application layer.

These protocol interfaces define contracts for adapters.
The jar service depends on these ports, never on concrete implementations.
"""

__all__ = [
    "PreferencesTransformerPort",
    "StoragePort",
]

from osgijar.app.ports.preferences import PreferencesTransformerPort
from osgijar.app.ports.storage import StoragePort
