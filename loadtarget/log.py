"""Logging for loadtarget and the ASGI servers it runs.

One stderr handler per namespace in ``NAMESPACES`` carries the same
formatter, so ``--log-json`` also covers uvicorn's lifecycle and access
lines. Hypercorn is handed ``loadtarget`` loggers directly (see
``loadtarget.server``).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

NAMESPACES = ("loadtarget", "uvicorn")

TEXT_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per line: time, level, logger, message[, exception]."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def make_formatter(json_format: bool = False) -> logging.Formatter:
    if json_format:
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(level: int = logging.INFO, *, json_format: bool = False) -> logging.Logger:
    """Attach a stderr handler to every namespace in ``NAMESPACES``.

    Calling again re-applies level and format to the existing handlers
    instead of adding new ones.

    Returns:
        The ``loadtarget`` logger.
    """
    formatter = make_formatter(json_format)
    for name in NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        if not logger.handlers:
            logger.addHandler(logging.StreamHandler(sys.stderr))
        for handler in logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
    return logging.getLogger("loadtarget")


def get_logger(name: str) -> logging.Logger:
    """``get_logger("server")`` returns the ``loadtarget.server`` logger."""
    return logging.getLogger(f"loadtarget.{name}")
