"""Data models for control-flow graph input and the derived graph.

The raw models mirror the JSON payload (camelCase aliases) and are validated
with pydantic. The derived graph is a set of frozen dataclasses: edges refer
to node ids, never to node objects, so the layout engine can index them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class EdgeKind(StrEnum):
    """Edge kinds. The first three are control flow; DETAIL is synthesized."""

    SEQUENTIAL = "SequentialEdge"
    TRUE = "TrueEdge"
    FALSE = "FalseEdge"
    DETAIL = "detail"

    @property
    def is_flow(self) -> bool:
        return self is not EdgeKind.DETAIL

    @property
    def label(self) -> str | None:
        """Short label drawn at the midpoint of conditional edges."""
        if self is EdgeKind.TRUE:
            return "T"
        if self is EdgeKind.FALSE:
            return "F"
        return None


class NodeRole(StrEnum):
    """Derived node roles."""

    START = "start"
    END = "end"
    MAIN = "main"
    DETAIL = "detail"

    @property
    def caption(self) -> str:
        return _ROLE_CAPTIONS[self]

    @property
    def badge(self) -> str | None:
        """Badge drawn above Start/End nodes."""
        if self is NodeRole.START:
            return "START"
        if self is NodeRole.END:
            return "END"
        return None


_ROLE_CAPTIONS = {
    NodeRole.START: "(START)",
    NodeRole.END: "(END)",
    NodeRole.MAIN: "(CFG Node)",
    NodeRole.DETAIL: "(Expression Detail)",
}


# --- Raw input models ---


class RawNode(BaseModel):
    """A node as it appears in the input payload."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictInt
    text: str
    sub_nodes: list[StrictInt] = Field(default_factory=list, alias="subNodes")

    @field_validator("sub_nodes", mode="before")
    @classmethod
    def _null_sub_nodes(cls, value: Any) -> Any:
        return [] if value is None else value


class RawEdge(BaseModel):
    """A control-flow edge as it appears in the input payload."""

    model_config = ConfigDict(populate_by_name=True)

    source_id: StrictInt = Field(..., alias="sourceId")
    dest_id: StrictInt = Field(..., alias="destId")
    kind: EdgeKind = EdgeKind.SEQUENTIAL

    @field_validator("kind", mode="before")
    @classmethod
    def _default_kind(cls, value: Any) -> Any:
        # absent, null and "" all mean sequential
        return value or EdgeKind.SEQUENTIAL

    @field_validator("kind")
    @classmethod
    def _flow_kind_only(cls, value: EdgeKind) -> EdgeKind:
        if not value.is_flow:
            raise ValueError("detail edges are derived from subNodes, not declared")
        return value


class StateRecord(BaseModel):
    """Abstract-interpretation state; every section is optional.

    Sections are kept as given. Only mappings are shown on selection.
    """

    model_config = ConfigDict(extra="allow")

    heap: Any = None
    type: Any = None
    value: Any = None


class DescriptionRecord(BaseModel):
    """Opaque analysis payload attached to a node.

    Only ``expressions`` drives behaviour (highlighting); everything else is
    carried through untouched, including keys this model does not name.
    """

    model_config = ConfigDict(extra="allow")

    expressions: list[str] | None = None
    state: StateRecord | None = None


class DescriptionEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    node_id: StrictInt = Field(..., alias="nodeId")
    description: DescriptionRecord | None = None


class RawGraph(BaseModel):
    """Complete input payload."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    description: Any = None
    nodes: list[RawNode]
    edges: list[RawEdge]
    descriptions: list[DescriptionEntry] | None = None


# --- Derived graph ---


@dataclass(frozen=True)
class GraphNode:
    id: int
    text: str
    role: NodeRole
    sub_node_ids: tuple[int, ...] = ()
    description: DescriptionRecord | None = None

    @property
    def is_detail(self) -> bool:
        return self.role is NodeRole.DETAIL


@dataclass(frozen=True)
class GraphEdge:
    id: int
    source: int
    target: int
    kind: EdgeKind

    @property
    def is_detail(self) -> bool:
        return self.kind is EdgeKind.DETAIL


@dataclass(frozen=True)
class VisibleSubgraph:
    """Filtered view of a graph handed to the layout engine."""

    nodes: tuple[GraphNode, ...]
    edges: tuple[GraphEdge, ...]
    show_details: bool

    @property
    def node_ids(self) -> frozenset[int]:
        return frozenset(node.id for node in self.nodes)

    @property
    def edge_ids(self) -> frozenset[int]:
        return frozenset(edge.id for edge in self.edges)

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class Graph:
    """Normalized control-flow graph with derived roles and detail edges."""

    nodes: dict[int, GraphNode]
    edges: tuple[GraphEdge, ...]
    name: str | None = None
    connected: frozenset[int] = field(default_factory=frozenset)

    def node(self, node_id: int) -> GraphNode | None:
        return self.nodes.get(node_id)

    @property
    def flow_edges(self) -> tuple[GraphEdge, ...]:
        return tuple(edge for edge in self.edges if not edge.is_detail)

    @property
    def detail_edges(self) -> tuple[GraphEdge, ...]:
        return tuple(edge for edge in self.edges if edge.is_detail)

    def roles(self) -> dict[int, NodeRole]:
        return {node_id: node.role for node_id, node in self.nodes.items()}

    def visible(self, show_details: bool) -> VisibleSubgraph:
        """Return all nodes/edges, or only non-Detail ones when details are hidden."""
        if show_details:
            return VisibleSubgraph(
                nodes=tuple(self.nodes.values()),
                edges=self.edges,
                show_details=True,
            )
        return VisibleSubgraph(
            nodes=tuple(n for n in self.nodes.values() if not n.is_detail),
            edges=tuple(e for e in self.edges if not e.is_detail),
            show_details=False,
        )
