"""Elevation-based terrain coloring."""

from .colorize import color_from_stops, colorize, colorize_positions, height_range
from .presets import (
    PRESET_STOPS,
    TerrainColorization,
    TerrainPreset,
    colorize_terrain,
    resolve_color_stops,
)

__all__ = [
    "colorize",
    "colorize_positions",
    "color_from_stops",
    "height_range",
    "TerrainPreset",
    "TerrainColorization",
    "PRESET_STOPS",
    "resolve_color_stops",
    "colorize_terrain",
]
