"""Nesting of flat parent-linked records into a forest."""

import logging
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class NestReport:
    """Result of nesting, with everything the lenient policy absorbed.

    ``nodes`` maps each surviving id to its nested record, including
    records that are unreachable from ``roots`` (dangling or cyclic).
    """

    roots: list[dict] = field(default_factory=list)
    nodes: dict = field(default_factory=dict)
    duplicate_ids: list[Hashable] = field(default_factory=list)
    dangling: list[tuple[Hashable, Hashable]] = field(default_factory=list)
    self_referencing: list[Hashable] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """True when no record was dropped, replaced or self-linked."""
        return not (self.duplicate_ids or self.dangling or self.self_referencing)

    @property
    def node_count(self) -> int:
        """Number of surviving index slots, reachable or not."""
        return len(self.nodes)

    @property
    def dropped_count(self) -> int:
        return len(self.dangling)

    def errors(self) -> list[str]:
        """Describe each anomaly as a message."""
        messages = [f"Duplicate id: {record_id!r}" for record_id in self.duplicate_ids]
        messages.extend(
            f"Unknown parent {parent!r} for id {record_id!r}"
            for record_id, parent in self.dangling
        )
        messages.extend(
            f"Record {record_id!r} is its own parent"
            for record_id in self.self_referencing
        )
        return messages


class NestingError(Exception):
    """Raised in strict mode when the input is not a clean forest."""

    def __init__(self, errors: list[str], report: NestReport):
        self.errors = errors
        self.report = report
        super().__init__(f"Nesting failed: {errors}")


def nest_with_report(
    records: Iterable[Mapping[str, Any]],
    id_field: str = "id",
    parent_field: str = "parent",
    children_field: str = "children",
    strict: bool = False,
) -> NestReport:
    """Nest flat records and report what was dropped or replaced.

    Args:
        records: Flat records, each with an id and an optional parent id
        id_field: Name of the identifier field
        parent_field: Name of the parent identifier field
        children_field: Name of the field that receives child records
        strict: If True, raise instead of silently absorbing anomalies

    Returns:
        NestReport whose ``roots`` is the nested forest

    Raises:
        NestingError: If strict=True and the input has duplicate ids,
            dangling parents or self-referencing records
    """
    report = NestReport()
    index: dict[Hashable, dict] = {}
    seen_duplicates: set = set()

    # Index pass: later duplicates replace the value but keep the slot position
    for record in records:
        node = dict(record)
        node[children_field] = []
        record_id = node.get(id_field)

        if record_id in index and record_id not in seen_duplicates:
            seen_duplicates.add(record_id)
            report.duplicate_ids.append(record_id)

        index[record_id] = node

    # Link pass: single flat loop, never follows parent chains
    for record_id, node in index.items():
        parent_id = node.get(parent_field)

        if parent_id is None:
            report.roots.append(node)
            continue

        parent = index.get(parent_id)
        if parent is None:
            report.dangling.append((record_id, parent_id))
            logger.debug(
                f"Dropping record {record_id!r}: unknown parent {parent_id!r}",
                extra={"record_id": record_id, "parent_id": parent_id},
            )
            continue

        if parent is node:
            report.self_referencing.append(record_id)

        parent[children_field].append(node)

    report.nodes = index

    logger.debug(
        f"Nested {report.node_count} records into {len(report.roots)} roots",
        extra={
            "node_count": report.node_count,
            "root_count": len(report.roots),
            "dropped_count": report.dropped_count,
            "duplicate_count": len(report.duplicate_ids),
            "self_reference_count": len(report.self_referencing),
        },
    )

    if strict and not report.is_clean:
        raise NestingError(report.errors(), report)

    return report


def nest(
    records: Iterable[Mapping[str, Any]],
    id_field: str = "id",
    parent_field: str = "parent",
    children_field: str = "children",
    strict: bool = False,
) -> list[dict]:
    """Nest flat records into a forest of records with children.

    Each output node is a shallow copy of its input record plus a
    ``children`` list. Roots are records whose parent is None or absent.
    Records pointing at an unknown parent are dropped, and for duplicate
    ids the last record wins at the first record's position.

    Example:
        >>> nest([{"id": 1, "parent": None}, {"id": 2, "parent": 1}])
        [{'id': 1, 'parent': None, 'children': [{'id': 2, 'parent': 1, 'children': []}]}]
    """
    return nest_with_report(
        records,
        id_field=id_field,
        parent_field=parent_field,
        children_field=children_field,
        strict=strict,
    ).roots
