"""Record structure transforms.

Handles:
- Nesting flat parent-linked records into a forest
- Reporting duplicate ids, unknown parents and self-references
- Flattening a forest back into parent-linked records
"""

from .flatten import count_nodes, flatten_tree
from .nest import NestReport, NestingError, nest, nest_with_report

__all__ = [
    # Nesting
    "nest",
    "nest_with_report",
    "NestReport",
    "NestingError",
    # Flattening
    "flatten_tree",
    "count_nodes",
]
