"""Core graph model, parsing and validation for cfg-viewer."""

from .descriptions import DescriptionIndex
from .exceptions import (
    CFGViewerError,
    ConfigError,
    InteractionError,
    ParseError,
    SelectionError,
    ValidationError,
)
from .graph_builder import build_graph, classify_roles
from .loader import parse_graph_text, read_graph_file, validate_payload
from .models import (
    DescriptionRecord,
    EdgeKind,
    Graph,
    GraphEdge,
    GraphNode,
    NodeRole,
    RawGraph,
    VisibleSubgraph,
)

__all__ = [
    "CFGViewerError",
    "ConfigError",
    "DescriptionIndex",
    "DescriptionRecord",
    "EdgeKind",
    "Graph",
    "GraphEdge",
    "GraphNode",
    "InteractionError",
    "NodeRole",
    "ParseError",
    "RawGraph",
    "SelectionError",
    "ValidationError",
    "VisibleSubgraph",
    "build_graph",
    "classify_roles",
    "parse_graph_text",
    "read_graph_file",
    "validate_payload",
]
