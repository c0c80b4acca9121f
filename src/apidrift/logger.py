"""
Logging setup for apidrift.

stdout carries report output only, so all log records go to stderr.
Two formats are supported:

- ``text``: ``LEVEL logger: message`` for interactive use
- ``json``: one JSON object per line for log shippers (Loki, etc.)

Usage:
    from apidrift.logger import configure_logging

    configure_logging(level="info", fmt="json")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

_ROOT_LOGGER = "apidrift"
_HANDLER_NAME = "apidrift-stderr"


class JsonLineFormatter(logging.Formatter):
    """Formats each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "warning", fmt: str = "text") -> logging.Logger:
    """
    Install a single stderr handler on the ``apidrift`` logger.

    Calling again replaces the previous handler, so repeated CLI
    invocations in one process (tests) do not duplicate output.

    Args:
        level: debug | info | warning | error
        fmt: text | json

    Returns:
        The configured ``apidrift`` logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
