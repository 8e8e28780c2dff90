"""Utility modules for nesting runs.

Includes:
- Logging configuration
- Structured run logging
- File I/O helpers
"""

from .file_io import read_json, read_jsonl, read_parquet, read_records, write_json
from .logging_config import build_json_formatter, get_logger, setup_logging
from .run_logger import RunLogger, timed_operation

__all__ = [
    "setup_logging",
    "get_logger",
    "build_json_formatter",
    "read_json",
    "read_jsonl",
    "read_parquet",
    "read_records",
    "write_json",
    "RunLogger",
    "timed_operation",
]
