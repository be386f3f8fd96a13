"""Settings for layout and display, loadable from YAML."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from ..core.exceptions import ConfigError
from . import defaults


@dataclass
class LayoutSettings:
    """Force simulation parameters."""

    canvas_width: int = defaults.DEFAULT_CANVAS_WIDTH
    canvas_height: int = defaults.DEFAULT_CANVAS_HEIGHT

    detail_link_distance: float = defaults.DETAIL_LINK_DISTANCE
    flow_link_distance: float = defaults.FLOW_LINK_DISTANCE
    link_strength: float = defaults.LINK_STRENGTH

    charge_strength: float = defaults.CHARGE_STRENGTH
    charge_distance_min: float = defaults.CHARGE_DISTANCE_MIN

    detail_collision_radius: float = defaults.DETAIL_COLLISION_RADIUS
    main_collision_radius: float = defaults.MAIN_COLLISION_RADIUS
    collision_strength: float = defaults.COLLISION_STRENGTH
    collision_iterations: int = defaults.COLLISION_ITERATIONS

    alpha_min: float = defaults.ALPHA_MIN
    alpha_decay: float | None = None  # derived from alpha_min when unset
    velocity_decay: float = defaults.VELOCITY_DECAY
    drag_alpha_target: float = defaults.DRAG_ALPHA_TARGET

    def __post_init__(self) -> None:
        if not 0 < self.alpha_min < 1:
            raise ConfigError(
                "alpha_min must be between 0 and 1",
                context={"alpha_min": self.alpha_min},
            )
        if self.alpha_decay is None:
            self.alpha_decay = 1 - self.alpha_min ** (1 / defaults.ALPHA_DECAY_TICKS)

    @property
    def center(self) -> tuple[float, float]:
        return self.canvas_width / 2, self.canvas_height / 2


@dataclass
class DisplaySettings:
    """Static node presentation attributes."""

    detail_text_limit: int = defaults.DETAIL_TEXT_LIMIT
    main_text_limit: int = defaults.MAIN_TEXT_LIMIT
    state_preview_size: int = defaults.STATE_PREVIEW_SIZE


@dataclass
class ViewerConfig:
    """Complete viewer configuration."""

    layout: LayoutSettings = field(default_factory=LayoutSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    show_details: bool = False

    def __post_init__(self) -> None:
        if self.layout.canvas_width <= 0 or self.layout.canvas_height <= 0:
            raise ConfigError(
                "Canvas size must be positive",
                context={
                    "canvas_width": self.layout.canvas_width,
                    "canvas_height": self.layout.canvas_height,
                },
            )
        if self.layout.collision_iterations < 1:
            raise ConfigError(
                "collision_iterations must be at least 1",
                context={"collision_iterations": self.layout.collision_iterations},
            )

    @classmethod
    def load(cls, path: Path) -> ViewerConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            ViewerConfig instance (defaults when the file does not exist)

        Raises:
            ConfigError: If the file is not valid YAML or has unknown keys
        """
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root in {path} must be a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ViewerConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            ViewerConfig instance
        """
        unknown = set(data) - {"layout", "display", "show_details"}
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                context={"keys": sorted(unknown)},
            )

        return cls(
            layout=_build_section(LayoutSettings, data.get("layout") or {}, "layout"),
            display=_build_section(
                DisplaySettings, data.get("display") or {}, "display"
            ),
            show_details=bool(data.get("show_details", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        layout = asdict(self.layout)
        if layout["alpha_decay"] == LayoutSettings(alpha_min=self.layout.alpha_min).alpha_decay:
            # derived from alpha_min
            del layout["alpha_decay"]
        return {
            "layout": layout,
            "display": asdict(self.display),
            "show_details": self.show_details,
        }

    def save(self, path: Path) -> None:
        """Save configuration to YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def _build_section(section_cls: type, values: dict[str, Any], name: str) -> Any:
    if not isinstance(values, dict):
        raise ConfigError(
            f"Section '{name}' must be a mapping", context={"section": name}
        )
    known = {f.name for f in fields(section_cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigError(
            f"Unknown keys in '{name}': {', '.join(sorted(unknown))}",
            context={"section": name, "keys": sorted(unknown)},
        )
    return section_cls(**values)
