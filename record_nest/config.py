"""Nesting configuration from arguments or environment."""

import os
from typing import Optional

DEFAULT_ID_FIELD = "id"
DEFAULT_PARENT_FIELD = "parent"
DEFAULT_CHILDREN_FIELD = "children"

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY_VALUES


class NestConfig:
    """Field names and strictness used when nesting records.

    Explicit arguments win, then environment variables
    (NEST_ID_FIELD, NEST_PARENT_FIELD, NEST_CHILDREN_FIELD, NEST_STRICT),
    then the defaults.
    """

    def __init__(
        self,
        id_field: Optional[str] = None,
        parent_field: Optional[str] = None,
        children_field: Optional[str] = None,
        strict: Optional[bool] = None,
    ):
        self.id_field = id_field or os.getenv("NEST_ID_FIELD") or DEFAULT_ID_FIELD
        self.parent_field = (
            parent_field or os.getenv("NEST_PARENT_FIELD") or DEFAULT_PARENT_FIELD
        )
        self.children_field = (
            children_field or os.getenv("NEST_CHILDREN_FIELD") or DEFAULT_CHILDREN_FIELD
        )
        self.strict = strict if strict is not None else _env_flag("NEST_STRICT")

        fields = [self.id_field, self.parent_field, self.children_field]
        if any(not name.strip() for name in fields):
            raise ValueError("Field names must not be empty")
        if len(set(fields)) != len(fields):
            raise ValueError(f"Field names must be distinct: {fields}")

    def as_kwargs(self) -> dict:
        """Keyword arguments for nest() and nest_with_report()."""
        return {
            "id_field": self.id_field,
            "parent_field": self.parent_field,
            "children_field": self.children_field,
            "strict": self.strict,
        }

    def __repr__(self) -> str:
        return (
            f"NestConfig(id_field={self.id_field!r}, parent_field={self.parent_field!r}, "
            f"children_field={self.children_field!r}, strict={self.strict!r})"
        )
