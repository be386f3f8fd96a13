"""Node selection and analysis-state highlighting.

Selecting a node resolves its description and splits its abstract state
into heap / type / value sections. An entry is highlighted when its key
contains one of the node's current expressions as a substring. Keys encode
variable and heap-location names, so an expression such as ``b1`` also
matches ``b10``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .config.defaults import STATE_PREVIEW_SIZE
from .core.exceptions import SelectionError
from .core.models import DescriptionRecord, Graph, GraphNode, NodeRole
from .render import RenderSurface

# (state attribute, section title, truncated in preview)
STATE_SECTIONS: tuple[tuple[str, str, bool], ...] = (
    ("heap", "Heap State", True),
    ("type", "Type Information", True),
    ("value", "Value Information", False),
)


def should_highlight(key: str, expressions: Iterable[str]) -> bool:
    """Return True if ``key`` contains any expression as a substring."""
    return any(expr in key for expr in expressions)


@dataclass(frozen=True)
class StateEntry:
    key: str
    value: Any
    highlighted: bool


@dataclass(frozen=True)
class StateSection:
    """One state mapping of a description, with per-entry highlight flags."""

    name: str
    title: str
    entries: tuple[StateEntry, ...]
    preview_size: int | None = STATE_PREVIEW_SIZE

    @property
    def preview(self) -> tuple[StateEntry, ...]:
        if self.preview_size is None:
            return self.entries
        return self.entries[: self.preview_size]

    @property
    def hidden_count(self) -> int:
        return len(self.entries) - len(self.preview)

    @property
    def highlighted_keys(self) -> tuple[str, ...]:
        return tuple(entry.key for entry in self.entries if entry.highlighted)


@dataclass(frozen=True)
class SelectionView:
    """Everything the details panel shows for the selected node."""

    node_id: int
    text: str
    role: NodeRole
    expressions: tuple[str, ...] = ()
    sections: tuple[StateSection, ...] = ()
    has_description: bool = False

    @property
    def caption(self) -> str:
        return self.role.caption

    def section(self, name: str) -> StateSection | None:
        for section in self.sections:
            if section.name == name:
                return section
        return None


@dataclass(frozen=True)
class HoverInfo:
    """Tooltip content for a hovered node."""

    node_id: int
    text: str
    role: NodeRole
    expressions: tuple[str, ...] | None = None


def build_selection_view(
    node: GraphNode, preview_size: int | None = STATE_PREVIEW_SIZE
) -> SelectionView:
    """Build the details view of ``node`` from its description."""
    description = node.description
    if description is None:
        return SelectionView(node_id=node.id, text=node.text, role=node.role)

    expressions = tuple(description.expressions or ())
    return SelectionView(
        node_id=node.id,
        text=node.text,
        role=node.role,
        expressions=expressions,
        sections=_state_sections(description, expressions, preview_size),
        has_description=True,
    )


def _state_sections(
    description: DescriptionRecord,
    expressions: tuple[str, ...],
    preview_size: int | None,
) -> tuple[StateSection, ...]:
    state = description.state
    if state is None:
        return ()

    sections = []
    for name, title, truncated in STATE_SECTIONS:
        mapping = getattr(state, name)
        if not isinstance(mapping, Mapping):
            if mapping is not None:
                logger.debug(f"Skipping non-mapping {name} section")
            continue
        sections.append(
            StateSection(
                name=name,
                title=title,
                entries=tuple(
                    StateEntry(key, value, should_highlight(key, expressions))
                    for key, value in mapping.items()
                ),
                preview_size=preview_size if truncated else None,
            )
        )
    return tuple(sections)


class SelectionService:
    """Holds the single selected node of a session."""

    def __init__(
        self, surface: RenderSurface, preview_size: int | None = STATE_PREVIEW_SIZE
    ) -> None:
        self.surface = surface
        self.preview_size = preview_size
        self._graph: Graph | None = None
        self.selected_id: int | None = None
        self.hovered_id: int | None = None

    def reset(self, graph: Graph | None) -> None:
        """Forget the selection and start serving ``graph``."""
        self._graph = graph
        self.selected_id = None
        self.hovered_id = None
        self.surface.mark_selected(None)

    def _node(self, node_id: int) -> GraphNode:
        if self._graph is None:
            raise SelectionError("No graph loaded", context={"node_id": node_id})
        node = self._graph.node(node_id)
        if node is None:
            raise SelectionError(
                f"Unknown node id {node_id}", context={"node_id": node_id}
            )
        return node

    def select(self, node_id: int) -> SelectionView:
        """Select ``node_id``, replacing any previous selection."""
        node = self._node(node_id)
        view = build_selection_view(node, self.preview_size)
        self.selected_id = node_id
        self.surface.mark_selected(node_id)
        logger.debug(
            f"Selected node {node_id}: {len(view.expressions)} expressions, "
            f"{sum(len(s.highlighted_keys) for s in view.sections)} highlighted entries"
        )
        return view

    def deselect(self) -> None:
        self.selected_id = None
        self.surface.mark_selected(None)

    def refresh_mark(self) -> None:
        """Re-apply the current mark after the surface was redrawn."""
        self.surface.mark_selected(self.selected_id)

    def hover(self, node_id: int) -> HoverInfo:
        node = self._node(node_id)
        self.hovered_id = node_id
        description = node.description
        expressions = (
            tuple(description.expressions)
            if description is not None and description.expressions is not None
            else None
        )
        return HoverInfo(node.id, node.text, node.role, expressions)

    def unhover(self) -> None:
        self.hovered_id = None
