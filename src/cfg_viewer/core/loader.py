"""Reading and validating raw CFG payloads.

Two stages, two failure types: decoding text into a mapping raises
``ParseError``; checking that mapping against the input schema raises
``ValidationError`` naming the offending field.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import orjson
import pydantic
from loguru import logger

from .exceptions import ParseError, ValidationError
from .models import RawGraph


def parse_graph_text(text: str | bytes) -> dict[str, Any]:
    """Decode JSON text into a payload mapping.

    Raises:
        ParseError: If the text is empty, not JSON, or not a JSON object
    """
    if isinstance(text, str):
        text = text.strip()
    if not text:
        raise ParseError("Please enter JSON data to visualize.")

    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise ParseError(f"Error parsing JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object at the top level, got {type(data).__name__}"
        )
    return data


def read_graph_file(path: Path) -> dict[str, Any]:
    """Read and decode a CFG JSON file."""
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ParseError(f"Cannot read {path}: {e}", context={"path": str(path)}) from e
    logger.debug(f"Read {len(content)} bytes from {path}")
    return parse_graph_text(content)


def validate_payload(data: Mapping[str, Any]) -> RawGraph:
    """Validate a decoded payload against the input schema.

    ``nodes`` and ``edges`` are checked first so the common mistakes get a
    plain message; deeper problems are reported with their field path.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    if not isinstance(data, Mapping):
        raise ValidationError(
            "Input must be a JSON object with 'nodes' and 'edges'",
            context={"field": "<root>"},
        )

    for required in ("nodes", "edges"):
        if not isinstance(data.get(required), list):
            raise ValidationError(
                f'Data must contain a "{required}" array.',
                context={"field": required},
            )

    try:
        return RawGraph.model_validate(dict(data))
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = format_location(first["loc"])
        raise ValidationError(
            f"Invalid field '{field}': {first['msg']}",
            context={"field": field, "errors": e.error_count()},
        ) from e


def format_location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``nodes[2].subNodes[0]``."""
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(f".{item}" if parts else str(item))
    return "".join(parts)
