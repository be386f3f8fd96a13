"""Rendering surface interface and static node/edge presentation attributes.

The drawing surface itself lives outside this package. The core hands it
static attributes once per layout run (``draw_graph``), streams positions
every tick (``update_positions``) and marks the selected node.
``RecordingSurface`` keeps those calls in memory for tests and headless use.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .config import defaults
from .config.settings import DisplaySettings
from .core.models import EdgeKind, GraphEdge, GraphNode, NodeRole
from .layout.snapshot import PositionsSnapshot


@dataclass(frozen=True)
class NodeAttributes:
    """Static per-node attributes computed once per graph."""

    node_id: int
    text: str
    short_text: str
    role: NodeRole
    badge: str | None
    expandable: bool
    width: int
    height: int
    has_description: bool

    @classmethod
    def from_node(
        cls, node: GraphNode, display: DisplaySettings | None = None
    ) -> NodeAttributes:
        display = display or DisplaySettings()
        if node.is_detail:
            limit = display.detail_text_limit
            min_width, height = defaults.DETAIL_MIN_WIDTH, defaults.DETAIL_HEIGHT
        else:
            limit = display.main_text_limit
            min_width, height = defaults.MAIN_MIN_WIDTH, defaults.MAIN_HEIGHT

        expandable = len(node.text) > limit
        return cls(
            node_id=node.id,
            text=node.text,
            short_text=node.text[:limit] + "..." if expandable else node.text,
            role=node.role,
            badge=node.role.badge,
            expandable=expandable,
            width=max(min_width, len(node.text) * defaults.CHAR_WIDTH),
            height=height,
            has_description=node.description is not None,
        )


@dataclass(frozen=True)
class EdgeAttributes:
    edge_id: int
    source: int
    target: int
    kind: EdgeKind
    label: str | None
    dashed: bool

    @classmethod
    def from_edge(cls, edge: GraphEdge) -> EdgeAttributes:
        return cls(
            edge_id=edge.id,
            source=edge.source,
            target=edge.target,
            kind=edge.kind,
            label=edge.kind.label,
            dashed=edge.is_detail,
        )


@runtime_checkable
class RenderSurface(Protocol):
    """What the core needs from a drawing surface."""

    def draw_graph(
        self, nodes: Sequence[NodeAttributes], edges: Sequence[EdgeAttributes]
    ) -> None: ...

    def update_positions(self, snapshot: PositionsSnapshot) -> None: ...

    def mark_selected(self, node_id: int | None) -> None:
        """Highlight ``node_id``, or nothing for None.

        The id may name a node that is not drawn (a hidden detail node);
        surfaces mark it only while a drawn node has that id.
        """
        ...

    def clear(self) -> None: ...


class RecordingSurface:
    """In-memory surface that remembers what it was asked to draw.

    Only the most recent ``history`` snapshots are kept.
    """

    def __init__(self, history: int = defaults.SNAPSHOT_HISTORY) -> None:
        self.nodes: tuple[NodeAttributes, ...] = ()
        self.edges: tuple[EdgeAttributes, ...] = ()
        self.snapshots: deque[PositionsSnapshot] = deque(maxlen=history)
        self.selected: int | None = None
        self.draw_count = 0

    def draw_graph(
        self, nodes: Sequence[NodeAttributes], edges: Sequence[EdgeAttributes]
    ) -> None:
        self.nodes = tuple(nodes)
        self.edges = tuple(edges)
        self.snapshots.clear()
        self.draw_count += 1

    def update_positions(self, snapshot: PositionsSnapshot) -> None:
        self.snapshots.append(snapshot)

    def mark_selected(self, node_id: int | None) -> None:
        self.selected = node_id

    def clear(self) -> None:
        self.nodes = ()
        self.edges = ()
        self.snapshots.clear()
        self.selected = None

    @property
    def last_snapshot(self) -> PositionsSnapshot | None:
        return self.snapshots[-1] if self.snapshots else None

    @property
    def marked_node(self) -> int | None:
        """The selected node if it is among the drawn nodes, else None."""
        if self.selected is None:
            return None
        drawn = {attrs.node_id for attrs in self.nodes}
        return self.selected if self.selected in drawn else None
