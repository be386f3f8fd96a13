"""Configuration for cfg-viewer."""

from .settings import DisplaySettings, LayoutSettings, ViewerConfig

__all__ = ["DisplaySettings", "LayoutSettings", "ViewerConfig"]
