"""CLI JSON output wrapper with schema metadata."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from blockconv import __version__


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Args:
        schema_id: Identifier for the output type (e.g., "copy_report").
        schema_version: Integer version for backward compatibility.
        **data: Payload data to include in the response.

    Returns:
        JSON string with schema metadata and payload.

    Example:
        >>> json_response("copy_report", 1, bytes_read=20, bytes_written=5)
        {
          "schema_id": "copy_report",
          "schema_version": 1,
          "producer": "blockconv-0.1.0",
          "produced_at": "2026-10-18T10:30:00+00:00",
          "bytes_read": 20,
          "bytes_written": 5
        }
    """
    wrapped = {
        "schema_id": schema_id,
        "schema_version": schema_version,
        "producer": f"blockconv-{__version__}",
        "produced_at": datetime.now(UTC).isoformat(),
        **data,
    }
    return json.dumps(wrapped, indent=2, default=str)
