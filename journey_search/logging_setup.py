"""Logging configuration.

Modules log through ``logging.getLogger(__name__)`` and attach context
with ``extra=``. This module wires the root handler once, either with
the plain text format from the config or as one JSON object per line.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import ObservabilityConfig, get_config

# Attributes every LogRecord carries; anything else came from ``extra=``.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Configure the ``journey_search`` logger tree.

    Args:
        config: Logging settings; defaults to the application config.

    Returns:
        The package logger.
    """
    config = config or get_config().observability

    handler = logging.StreamHandler()
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    logger = logging.getLogger("journey_search")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
    logger.propagate = False
    return logger
