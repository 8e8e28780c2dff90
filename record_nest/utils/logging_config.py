"""Logging setup shared by the library and the CLI."""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

JSON_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
JSON_RENAMED_FIELDS = {"asctime": "timestamp", "levelname": "level", "name": "logger"}


def build_json_formatter() -> logging.Formatter:
    """JSON formatter emitting timestamp, level, logger, message and `extra` fields."""
    return jsonlogger.JsonFormatter(JSON_LOG_FORMAT, rename_fields=JSON_RENAMED_FIELDS)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    stream=None,
) -> None:
    """Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit JSON lines instead of plain text
        stream: Output stream (defaults to stderr)
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(build_json_formatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers = [handler]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the record_nest namespace."""
    if not name:
        return logging.getLogger("record_nest")
    if name.startswith("record_nest"):
        return logging.getLogger(name)
    return logging.getLogger(f"record_nest.{name}")
