"""Force-directed layout engine."""

from .runner import FrameClock, LayoutRunner, ManualClock, Subscription
from .simulation import ForceSimulation
from .snapshot import EdgeLabelPosition, EdgePosition, NodePosition, PositionsSnapshot

__all__ = [
    "EdgeLabelPosition",
    "EdgePosition",
    "ForceSimulation",
    "FrameClock",
    "LayoutRunner",
    "ManualClock",
    "NodePosition",
    "PositionsSnapshot",
    "Subscription",
]
