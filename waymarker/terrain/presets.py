"""Named terrain gradients and their resolution into color stops."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from ..config import DEFAULT_TERRAIN_COLOR, DEFAULT_TERRAIN_SMOOTHNESS
from ..models import ColorStop, parse_hex_color
from .colorize import VertexColorBuffer, colorize


class TerrainPreset(str, Enum):
    """Gradient choices offered for terrain coloring."""

    NONE = "none"
    NATURAL = "natural"
    EARTH = "earth"
    TOPO = "topo"
    MONO = "mono"
    CUSTOM = "custom"


def _stops(*pairs: Tuple[float, str]) -> Tuple[ColorStop, ...]:
    return tuple(ColorStop.from_hex(position, color) for position, color in pairs)


# Hypsometric tints: lowland greens through highland browns to snow.
PRESET_STOPS: Dict[TerrainPreset, Tuple[ColorStop, ...]] = {
    TerrainPreset.NATURAL: _stops(
        (0.0, "#2d5a27"),
        (0.3, "#5a8f3c"),
        (0.55, "#a8a060"),
        (0.8, "#8b6b4a"),
        (1.0, "#f5f5f0"),
    ),
    TerrainPreset.EARTH: _stops(
        (0.0, "#3e2b1f"),
        (0.4, "#8b5a2b"),
        (0.75, "#c19a6b"),
        (1.0, "#e8d8b8"),
    ),
    TerrainPreset.TOPO: _stops(
        (0.0, "#1a6e3a"),
        (0.25, "#7fb65a"),
        (0.5, "#f0e68c"),
        (0.75, "#d2884b"),
        (1.0, "#8c3b2a"),
    ),
    TerrainPreset.MONO: _stops(
        (0.0, "#2b2b2b"),
        (1.0, "#f2f2f2"),
    ),
}


@dataclass(slots=True)
class TerrainColorization:
    """User-facing colorization settings for a terrain preview."""

    preset: TerrainPreset = TerrainPreset.NATURAL
    smoothness: float = DEFAULT_TERRAIN_SMOOTHNESS
    custom_low: str = "#2d5a27"
    custom_mid: str = "#c2b280"
    custom_high: str = "#ffffff"
    fallback_color: str = DEFAULT_TERRAIN_COLOR


def resolve_color_stops(config: TerrainColorization) -> List[ColorStop]:
    """Return the gradient for ``config``; empty when coloring is disabled."""

    preset = TerrainPreset(config.preset)
    if preset is TerrainPreset.NONE:
        return []
    if preset is TerrainPreset.CUSTOM:
        return [
            ColorStop.from_hex(0.0, config.custom_low),
            ColorStop.from_hex(0.5, config.custom_mid),
            ColorStop.from_hex(1.0, config.custom_high),
        ]
    return list(PRESET_STOPS[preset])


def colorize_terrain(
    elevations: Sequence[float],
    clipped_mask: Sequence[bool],
    config: TerrainColorization,
) -> VertexColorBuffer:
    """Resolve ``config`` once and colorize the mesh elevations with it."""

    return colorize(
        elevations,
        clipped_mask,
        resolve_color_stops(config),
        config.smoothness,
        parse_hex_color(config.fallback_color),
    )


__all__ = [
    "TerrainPreset",
    "TerrainColorization",
    "PRESET_STOPS",
    "resolve_color_stops",
    "colorize_terrain",
]
