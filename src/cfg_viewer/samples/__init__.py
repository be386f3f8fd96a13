"""Bundled example CFGs.

- ``sequential``: straight-line ``Main::main`` with sub-expression nodes and
  heap/type/value descriptions
- ``conditional``: ``Main::emptyStructure`` with True/False branches and
  parallel edges, no descriptions
"""

from importlib import resources
from typing import Any

import orjson

SAMPLE_NAMES = ("sequential", "conditional")


def get_sample_bytes(name: str) -> bytes:
    """Return the raw JSON of sample ``name``."""
    if name not in SAMPLE_NAMES:
        raise KeyError(f"Unknown sample '{name}'. Available: {', '.join(SAMPLE_NAMES)}")
    return resources.files(__name__).joinpath(f"{name}.json").read_bytes()


def get_sample(name: str) -> dict[str, Any]:
    """Return sample ``name`` as a fresh payload mapping."""
    return orjson.loads(get_sample_bytes(name))
