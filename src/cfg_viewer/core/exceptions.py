"""Typed exception hierarchy for cfg-viewer.

Hierarchy
---------
CFGViewerError (base)
├── ParseError        – unreadable JSON / input payload
├── ValidationError   – missing or malformed fields, duplicate ids, dangling references
├── SelectionError    – selection or hover of an unknown node id
├── InteractionError  – drag events for nodes outside the visible subgraph
└── ConfigError       – configuration / settings errors

Every public entry point of the session raises one of these, so callers can
catch ``CFGViewerError`` at the boundary and decide how to surface it.
A failed load never partially applies: the previously loaded graph stays.
"""

from typing import Any


class CFGViewerError(Exception):
    """Base exception for cfg-viewer."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


# ── Input stage ─────────────────────────────────────────────────────────


class ParseError(CFGViewerError):
    """Input payload could not be read or decoded (e.g. malformed JSON)."""

    pass


class ValidationError(CFGViewerError):
    """Decoded input does not describe a valid CFG.

    ``context`` carries ``field`` (dotted path of the offending field) and/or
    ``node_id`` (the unknown or duplicated node id) when known.
    """

    @property
    def field(self) -> str | None:
        return self.context.get("field")

    @property
    def node_id(self) -> int | None:
        return self.context.get("node_id")


# ── Session layer ───────────────────────────────────────────────────────


class SelectionError(CFGViewerError):
    """Selection requested for a node id that is not part of the graph."""

    pass


class InteractionError(CFGViewerError):
    """Pointer interaction referenced a node that is not currently visible."""

    pass


# ── Configuration layer ─────────────────────────────────────────────────


class ConfigError(CFGViewerError):
    """Configuration / validation errors."""

    pass
