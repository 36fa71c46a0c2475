"""CLI JSON output wrapper.

Wraps command payloads with schema metadata (schema_id, schema_version,
producer, produced_at) so downstream tooling can version its parsing.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from osgijar import __version__


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Args:
        schema_id: Identifier for the output type (e.g., "jar_build").
        schema_version: Integer version for backward compatibility.
        **data: Payload data to include in the response.

    Returns:
        JSON string with schema metadata and payload.

    Example:
        >>> json_response("jar_build", 1, output_path="build/my-widget-1.0.0.jar")
        {
          "schema_id": "jar_build",
          "schema_version": 1,
          "producer": "osgijar-0.1.0",
          "produced_at": "2026-10-19T10:30:00+00:00",
          "output_path": "build/my-widget-1.0.0.jar"
        }
    """
    wrapped = {
        "schema_id": schema_id,
        "schema_version": schema_version,
        "producer": f"osgijar-{__version__}",
        "produced_at": datetime.now(UTC).isoformat(),
        **data,
    }
    return json.dumps(wrapped, indent=2, default=str)
