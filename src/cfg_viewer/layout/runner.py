"""Clock-driven execution of layout simulations.

The animation clock is an external collaborator: anything that can call a
callback once per frame. ``LayoutRunner`` subscribes one simulation at a
time and cancels the previous subscription before starting the next, so a
stale simulation can never keep writing positions for a replaced subgraph.
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import count
from typing import TYPE_CHECKING, Protocol

from loguru import logger

from ..config.defaults import ALPHA_START
from .simulation import ForceSimulation
from .snapshot import PositionsSnapshot

if TYPE_CHECKING:
    from ..render import RenderSurface

FrameCallback = Callable[[], None]


class Subscription(Protocol):
    def cancel(self) -> None: ...


class FrameClock(Protocol):
    """Animation clock: invokes callbacks once per frame until cancelled."""

    def on_each_frame(self, callback: FrameCallback) -> Subscription: ...


class _ManualSubscription:
    def __init__(self, clock: ManualClock, key: int) -> None:
        self._clock = clock
        self._key = key

    def cancel(self) -> None:
        self._clock._callbacks.pop(self._key, None)

    @property
    def active(self) -> bool:
        return self._key in self._clock._callbacks


class ManualClock:
    """Clock advanced explicitly by the caller.

    Used by tests and the headless CLI: ``advance(n)`` fires every active
    callback ``n`` times.
    """

    def __init__(self) -> None:
        self._callbacks: dict[int, FrameCallback] = {}
        self._keys = count()
        self.frame = 0

    def on_each_frame(self, callback: FrameCallback) -> _ManualSubscription:
        key = next(self._keys)
        self._callbacks[key] = callback
        return _ManualSubscription(self, key)

    @property
    def active_subscriptions(self) -> int:
        return len(self._callbacks)

    def advance(self, frames: int = 1) -> None:
        for _ in range(frames):
            self.frame += 1
            # callbacks may cancel or subscribe while we iterate
            for callback in list(self._callbacks.values()):
                callback()


class LayoutRunner:
    """Runs at most one simulation at a time against a frame clock."""

    def __init__(
        self,
        clock: FrameClock,
        surface: RenderSurface,
        iterations_per_frame: int = 1,
    ) -> None:
        self.clock = clock
        self.surface = surface
        self.iterations_per_frame = iterations_per_frame
        self.simulation: ForceSimulation | None = None
        self._subscription: Subscription | None = None
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._subscription is not None

    def start(self, simulation: ForceSimulation) -> None:
        """Replace the current run with ``simulation`` at full energy."""
        self.stop()
        self.simulation = simulation
        simulation.restart(alpha=ALPHA_START)
        self._subscription = self.clock.on_each_frame(self._on_frame)
        self.runs += 1
        logger.debug(f"Layout run {self.runs} started ({len(simulation)} nodes)")

    def stop(self) -> None:
        """Cancel the tick subscription of the current run, if any."""
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
        if self.simulation is not None:
            self.simulation.stop()

    def _on_frame(self) -> None:
        simulation = self.simulation
        if simulation is None or simulation.stopped or len(simulation) == 0:
            return
        snapshot: PositionsSnapshot = simulation.step(self.iterations_per_frame)
        self.surface.update_positions(snapshot)
