"""Nest flat parent-linked records into forests of records with children."""

from .config import NestConfig
from .transform import NestReport, NestingError, count_nodes, flatten_tree, nest, nest_with_report

__all__ = [
    "NestConfig",
    "NestReport",
    "NestingError",
    "count_nodes",
    "flatten_tree",
    "nest",
    "nest_with_report",
]
