"""Utility modules for common operations."""

from blockconv.utils.cli_output import json_response
from blockconv.utils.logging import configure_logging
from blockconv.utils.paths import ensure_new_output, ensure_readable_input

__all__ = [
    "configure_logging",
    "ensure_new_output",
    "ensure_readable_input",
    "json_response",
]
