"""cfg-viewer - interactive force-directed views of control-flow graphs."""

__version__ = "0.3.0"

from .core.exceptions import (
    CFGViewerError,
    ConfigError,
    InteractionError,
    ParseError,
    SelectionError,
    ValidationError,
)
from .core.graph_builder import build_graph
from .session import CFGSession

__all__ = [
    "CFGSession",
    "CFGViewerError",
    "ConfigError",
    "InteractionError",
    "ParseError",
    "SelectionError",
    "ValidationError",
    "__version__",
    "build_graph",
]
