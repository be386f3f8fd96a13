"""Shared fixtures for cfg-viewer tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from cfg_viewer.layout.runner import ManualClock
from cfg_viewer.render import RecordingSurface
from cfg_viewer.samples import get_sample, get_sample_bytes
from cfg_viewer.session import CFGSession


@pytest.fixture
def sequential_payload() -> dict[str, Any]:
    """Straight-line CFG 0 -> 4 -> 8 with sub-expression nodes and descriptions."""
    return get_sample("sequential")


@pytest.fixture
def conditional_payload() -> dict[str, Any]:
    """Branching CFG with True/False edges and a parallel edge pair 7 -> 8."""
    return get_sample("conditional")


@pytest.fixture
def two_node_payload() -> dict[str, Any]:
    return {
        "nodes": [{"id": 0, "text": "a"}, {"id": 1, "text": "b"}],
        "edges": [{"sourceId": 0, "destId": 1}],
    }


@pytest.fixture
def sequential_file(tmp_path: Path) -> Path:
    path = tmp_path / "sequential.json"
    path.write_bytes(get_sample_bytes("sequential"))
    return path


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def session(surface: RecordingSurface, clock: ManualClock) -> CFGSession:
    return CFGSession(surface=surface, clock=clock)
