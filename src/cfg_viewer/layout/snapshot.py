"""Per-tick position snapshots streamed to the rendering surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple


class NodePosition(NamedTuple):
    node_id: int
    x: float
    y: float


class EdgePosition(NamedTuple):
    edge_id: int
    x1: float
    y1: float
    x2: float
    y2: float


class EdgeLabelPosition(NamedTuple):
    """Midpoint of a True/False edge, where its T/F label is drawn."""

    edge_id: int
    x: float
    y: float
    text: str


@dataclass(frozen=True)
class PositionsSnapshot:
    tick: int
    alpha: float
    nodes: tuple[NodePosition, ...] = ()
    edges: tuple[EdgePosition, ...] = ()
    labels: tuple[EdgeLabelPosition, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, node_id: int) -> NodePosition | None:
        for position in self.nodes:
            if position.node_id == node_id:
                return position
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "alpha": self.alpha,
            "nodes": [p._asdict() for p in self.nodes],
            "edges": [p._asdict() for p in self.edges],
            "labels": [p._asdict() for p in self.labels],
        }
