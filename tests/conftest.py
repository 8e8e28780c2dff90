"""Pytest configuration and fixtures."""

import pytest
from hypothesis import HealthCheck, settings

# Hypothesis scans the project for constants on a cold cache, which is billed
# to the first generated input and trips the too_slow health check.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")

NEST_ENV_VARS = ["NEST_ID_FIELD", "NEST_PARENT_FIELD", "NEST_CHILDREN_FIELD", "NEST_STRICT"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without nesting variables in the environment."""
    for name in NEST_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def flat_records():
    """Small org chart as flat parent-linked records."""
    return [
        {"id": 1, "parent": None, "name": "CEO", "level": "exec"},
        {"id": 2, "parent": 1, "name": "CTO", "level": "exec"},
        {"id": 3, "parent": 2, "name": "Engineer A", "level": "ic"},
        {"id": 4, "parent": None, "name": "Board", "level": "board"},
        {"id": 5, "parent": 2, "name": "Engineer B", "level": "ic"},
        {"id": 6, "parent": 1, "name": "CFO", "level": "exec"},
    ]


@pytest.fixture
def string_id_records():
    """Records keyed by string ids, parent given as absent or None."""
    return [
        {"id": "root", "title": "Root"},
        {"id": "a", "parent": "root", "title": "A", "tags": ["x", "y"]},
        {"id": "b", "parent": "root", "title": "B"},
        {"id": "a1", "parent": "a", "title": "A1"},
    ]


@pytest.fixture
def malformed_records():
    """Records with a duplicate id, a dangling parent and a self-reference."""
    return [
        {"id": 1, "parent": None, "level": "a"},
        {"id": 2, "parent": 1},
        {"id": 3, "parent": 99},
        {"id": 4, "parent": 4},
        {"id": 1, "parent": None, "level": "b"},
    ]
