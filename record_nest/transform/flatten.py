"""Flattening of nested record forests back into parent-linked records."""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def flatten_tree(
    forest: list[dict],
    id_field: str = "id",
    parent_field: str = "parent",
    children_field: str = "children",
) -> list[dict]:
    """Flatten a nested forest into flat records in pre-order.

    The parent of each record is rebuilt from its position in the tree,
    so roots get ``None`` regardless of what their ``parent`` field held.
    A node reached a second time (e.g. a record that is its own child)
    is emitted only once.

    Args:
        forest: Root records, each with a list of children
        id_field: Name of the identifier field
        parent_field: Name of the parent identifier field to write
        children_field: Name of the children field to strip

    Returns:
        Flat records without the children field

    Example:
        >>> flatten_tree([{"id": 1, "children": [{"id": 2, "children": []}]}])
        [{'id': 1, 'parent': None}, {'id': 2, 'parent': 1}]
    """
    flattened: list[dict] = []
    visited: set[int] = set()
    stack: list[tuple[dict, Optional[Any]]] = [
        (node, None) for node in reversed(forest)
    ]

    while stack:
        node, parent_id = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))

        record = {key: value for key, value in node.items() if key != children_field}
        record[parent_field] = parent_id
        flattened.append(record)

        children = node.get(children_field) or []
        stack.extend((child, node.get(id_field)) for child in reversed(children))

    logger.debug(f"Flattened {len(flattened)} records")
    return flattened


def count_nodes(forest: list[dict], children_field: str = "children") -> int:
    """Count the distinct nodes reachable from the given roots."""
    visited: set[int] = set()
    stack = list(forest)

    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))
        stack.extend(node.get(children_field) or [])

    return len(visited)
