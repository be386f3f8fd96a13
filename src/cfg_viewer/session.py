"""Viewer session: the explicitly owned "current graph" and its collaborators.

A ``CFGSession`` holds one loaded graph, the detail-visibility flag, the
layout runner, the interaction controller and the selection service. Loading
builds the new graph completely before swapping it in, so a failed load
leaves the previous graph, selection and layout untouched.

Example:
    >>> session = CFGSession()
    >>> graph = session.load({"nodes": [{"id": 0, "text": "a"}, {"id": 1, "text": "b"}],
    ...                       "edges": [{"sourceId": 0, "destId": 1}]})
    >>> session.clock.advance(10)
    >>> session.select(0).role
    <NodeRole.START: 'start'>
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from .config.settings import ViewerConfig
from .core.graph_builder import build_graph
from .core.loader import parse_graph_text, validate_payload
from .core.models import Graph, RawGraph, VisibleSubgraph
from .interaction import InteractionController, Point
from .layout.runner import FrameClock, LayoutRunner, ManualClock
from .layout.simulation import ForceSimulation
from .layout.snapshot import PositionsSnapshot
from .render import EdgeAttributes, NodeAttributes, RecordingSurface, RenderSurface
from .selection import HoverInfo, SelectionService, SelectionView

RawInput = Mapping[str, Any] | RawGraph | str | bytes


class CFGSession:
    """One interactive CFG view."""

    def __init__(
        self,
        surface: RenderSurface | None = None,
        clock: FrameClock | None = None,
        config: ViewerConfig | None = None,
        seed_persisting_positions: bool = True,
    ) -> None:
        self.config = config or ViewerConfig()
        self.surface: RenderSurface = surface or RecordingSurface()
        self.clock: Any = clock or ManualClock()
        self.seed_persisting_positions = seed_persisting_positions

        self.runner = LayoutRunner(self.clock, self.surface)
        self.interaction = InteractionController(
            self.runner,
            on_visibility_change=self._on_visibility_change,
            settings=self.config.layout,
            show_details=self.config.show_details,
        )
        self.selection = SelectionService(
            self.surface, preview_size=self.config.display.state_preview_size
        )

        self.graph: Graph | None = None
        self.visible: VisibleSubgraph | None = None
        self._raw_input: Mapping[str, Any] | RawGraph | None = None
        self._node_attributes: dict[int, NodeAttributes] = {}
        self._edge_attributes: dict[int, EdgeAttributes] = {}

    # -- loading ---------------------------------------------------------

    def load(self, raw: RawInput) -> Graph:
        """Parse, validate and build ``raw``, then lay it out.

        Raises:
            ParseError: If text input is not a JSON object
            ValidationError: If the payload is not a valid CFG
        """
        payload: Mapping[str, Any] | RawGraph
        if isinstance(raw, (str, bytes)):
            payload = parse_graph_text(raw)
        else:
            payload = raw

        validated = payload if isinstance(payload, RawGraph) else validate_payload(payload)
        graph = build_graph(validated)

        # swap only after a successful build
        self.runner.stop()
        self.graph = graph
        self._raw_input = payload
        self._node_attributes = {
            node_id: NodeAttributes.from_node(node, self.config.display)
            for node_id, node in graph.nodes.items()
        }
        self._edge_attributes = {
            edge.id: EdgeAttributes.from_edge(edge) for edge in graph.edges
        }
        self.selection.reset(graph)
        self.visible = None
        self._relayout(graph)

        logger.info(
            f"CFG loaded: {graph.name or 'Control Flow Graph'} "
            f"({len(graph.nodes)} nodes, {len(graph.edges)} edges)"
        )
        return graph

    def clear(self) -> None:
        """Unload the graph and stop the layout."""
        self.runner.stop()
        self.graph = None
        self.visible = None
        self._raw_input = None
        self._node_attributes = {}
        self._edge_attributes = {}
        self.selection.reset(None)
        self.surface.clear()

    @property
    def raw_input(self) -> Mapping[str, Any] | RawGraph | None:
        """The payload of the current graph, exactly as it was loaded."""
        return self._raw_input

    @property
    def show_details(self) -> bool:
        return self.interaction.show_details

    @property
    def simulation(self) -> ForceSimulation | None:
        return self.runner.simulation

    def node_attributes(self, node_id: int) -> NodeAttributes | None:
        return self._node_attributes.get(node_id)

    # -- layout ----------------------------------------------------------

    def _on_visibility_change(self, show_details: bool) -> None:
        if self.graph is None:
            return
        self._relayout(self.graph)

    def _relayout(self, graph: Graph) -> None:
        previous = self.runner.simulation if self.visible is not None else None
        seed: dict[int, tuple[float, float]] = {}
        if previous is not None and self.seed_persisting_positions:
            seed = previous.positions()

        self.runner.stop()
        self.visible = graph.visible(self.show_details)
        simulation = ForceSimulation(
            self.visible, settings=self.config.layout, seed_positions=seed
        )

        self.surface.clear()
        self.surface.draw_graph(
            [self._node_attributes[node.id] for node in self.visible.nodes],
            [self._edge_attributes[edge.id] for edge in self.visible.edges],
        )
        self.selection.refresh_mark()
        self.runner.start(simulation)
        logger.debug(
            f"Layout restarted: {len(self.visible.nodes)} visible nodes, "
            f"{len(self.visible.edges)} visible edges, details={self.show_details}"
        )

    def run_layout(self, frames: int) -> PositionsSnapshot | None:
        """Advance a manual clock by ``frames`` and return the latest positions."""
        if not isinstance(self.clock, ManualClock):
            raise TypeError("run_layout needs a ManualClock")
        self.clock.advance(frames)
        simulation = self.runner.simulation
        return simulation.snapshot() if simulation is not None else None

    # -- interaction -----------------------------------------------------

    def on_drag_start(self, node_id: int, pointer: Point) -> None:
        self.interaction.on_drag_start(node_id, pointer)

    def on_drag(self, node_id: int, pointer: Point) -> None:
        self.interaction.on_drag(node_id, pointer)

    def on_drag_end(self, node_id: int) -> None:
        self.interaction.on_drag_end(node_id)

    def toggle_detail_visibility(self) -> bool:
        return self.interaction.toggle_detail_visibility()

    # -- selection -------------------------------------------------------

    def select(self, node_id: int) -> SelectionView:
        return self.selection.select(node_id)

    def deselect(self) -> None:
        self.selection.deselect()

    def hover(self, node_id: int) -> HoverInfo:
        return self.selection.hover(node_id)

    def unhover(self) -> None:
        self.selection.unhover()
