"""Logging setup for the command-line entry point.

Library modules only call ``logging.getLogger(__name__)``; the handler is
attached here to the ``blockconv`` logger. Diagnostics always go to stderr
because stdout may be carrying the copied data.
"""

from __future__ import annotations

import logging
import sys

_APP_LOGGER_NAME = "blockconv"
_HANDLER_NAME = "blockconv-stderr"


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Point a single stderr handler at the current ``sys.stderr`` and set the level."""

    logger = logging.getLogger(_APP_LOGGER_NAME)
    logger.setLevel(level if isinstance(level, int) else level.upper())

    # sys.stderr may have been replaced since the last call (CliRunner does this).
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s - %(message)s")
    )
    logger.addHandler(handler)
    return logger
