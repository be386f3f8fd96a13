"""Pointer drag pinning and detail-visibility toggling."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from .config.settings import LayoutSettings
from .core.exceptions import InteractionError
from .layout.runner import LayoutRunner
from .layout.simulation import ForceSimulation

Point = tuple[float, float]


class InteractionController:
    """Translates pointer and toggle events into layout changes.

    The controller is the only writer of pin state. While at least one drag
    is active the simulation's alpha target is raised so the rest of the
    layout keeps reacting; when the last drag ends it is dropped back to 0.
    """

    def __init__(
        self,
        runner: LayoutRunner,
        on_visibility_change: Callable[[bool], None],
        settings: LayoutSettings | None = None,
        show_details: bool = False,
    ) -> None:
        self.runner = runner
        self.settings = settings or LayoutSettings()
        self.show_details = show_details
        self._on_visibility_change = on_visibility_change
        self._dragging: set[int] = set()
        self._drag_simulation: ForceSimulation | None = None

    @property
    def dragging(self) -> frozenset[int]:
        return frozenset(self._dragging)

    def _simulation_for(self, node_id: int) -> ForceSimulation:
        simulation = self.runner.simulation
        if simulation is None or simulation.stopped:
            raise InteractionError(
                "No layout is running", context={"node_id": node_id}
            )
        if simulation is not self._drag_simulation:
            # drags do not survive a layout restart
            self._dragging.clear()
            self._drag_simulation = simulation
        if node_id not in simulation:
            raise InteractionError(
                f"Node {node_id} is not visible", context={"node_id": node_id}
            )
        return simulation

    def on_drag_start(self, node_id: int, pointer: Point) -> None:
        simulation = self._simulation_for(node_id)
        if not self._dragging:
            simulation.alpha_target = self.settings.drag_alpha_target
            simulation.restart()
        self._dragging.add(node_id)
        simulation.pin(node_id, *pointer)
        logger.debug(f"Drag start on node {node_id} at {pointer}")

    def on_drag(self, node_id: int, pointer: Point) -> None:
        simulation = self._simulation_for(node_id)
        if node_id not in self._dragging:
            raise InteractionError(
                f"Node {node_id} is not being dragged", context={"node_id": node_id}
            )
        simulation.pin(node_id, *pointer)

    def on_drag_end(self, node_id: int) -> None:
        simulation = self._simulation_for(node_id)
        if node_id not in self._dragging:
            raise InteractionError(
                f"Node {node_id} is not being dragged", context={"node_id": node_id}
            )
        self._dragging.discard(node_id)
        simulation.unpin(node_id)
        if not self._dragging:
            simulation.alpha_target = 0.0
        logger.debug(f"Drag end on node {node_id}")

    def toggle_detail_visibility(self) -> bool:
        """Flip detail visibility and re-render; returns the new flag."""
        self.show_details = not self.show_details
        self._dragging.clear()
        logger.debug(f"Detail nodes {'shown' if self.show_details else 'hidden'}")
        self._on_visibility_change(self.show_details)
        return self.show_details
