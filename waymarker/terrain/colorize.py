"""Elevation-based vertex coloring for terrain previews.

Clipped vertices (mesh fill outside the route boundary) always take the
fallback color and are left out of the height range used for normalization.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..models import RGB, ColorStop

VertexColorBuffer = NDArray[np.float32]

# Height spans below this are treated as flat terrain.
FLAT_RANGE_EPSILON = 1e-4
# Smoothness below this snaps each stop pair to two hard bands.
HARD_BAND_THRESHOLD = 0.3
# Smoothness below this (and above the hard threshold) quantizes to bands.
SOFT_BAND_THRESHOLD = 0.7
BAND_COUNT = 5


def height_range(
    elevations: Sequence[float], clipped_mask: Sequence[bool]
) -> Tuple[float, float]:
    """Return ``(min, max)`` over unclipped elevations, or ``(0, 0)`` if none."""

    values = np.asarray(elevations, dtype=float)
    mask = _clip_mask(clipped_mask, values.shape[0])
    visible = values[~mask]
    if visible.size == 0:
        return 0.0, 0.0
    return float(np.min(visible)), float(np.max(visible))


def color_from_stops(t: float, stops: Sequence[ColorStop], smoothness: float) -> RGB:
    """Return the gradient color at normalized elevation ``t``.

    ``stops`` must be non-empty. ``t`` is clamped to ``[0, 1]`` and the first
    stop pair that brackets it wins, even when the stops are out of order.
    When no pair brackets ``t`` it resolves to the first stop (below the first
    position) or the last stop (otherwise).
    """

    value = min(max(float(t), 0.0), 1.0)
    pairs = list(zip(stops, stops[1:]))
    for low, high in pairs:
        if low.position <= value <= high.position:
            span = high.position - low.position
            u = (value - low.position) / span if span > 0 else 0.0
            break
    else:
        if value < stops[0].position:
            low, high = pairs[0] if pairs else (stops[0], stops[0])
            u = 0.0
        else:
            low, high = pairs[-1] if pairs else (stops[-1], stops[-1])
            u = 1.0

    u = _apply_banding(u, smoothness)
    return (
        low.color[0] + (high.color[0] - low.color[0]) * u,
        low.color[1] + (high.color[1] - low.color[1]) * u,
        low.color[2] + (high.color[2] - low.color[2]) * u,
    )


def colorize(
    elevations: Sequence[float],
    clipped_mask: Sequence[bool],
    gradient: Sequence[ColorStop],
    smoothness: float,
    fallback_color: RGB,
) -> VertexColorBuffer:
    """Return a flat float32 RGB buffer, one triplet per vertex.

    Vertices that are clipped, or every vertex when ``gradient`` is empty, get
    ``fallback_color``. The others are normalized against the unclipped height
    range (flat terrain maps to 0.5) and looked up in ``gradient``.
    """

    values = np.asarray(elevations, dtype=float)
    count = values.shape[0]
    colors = np.empty((count, 3), dtype=np.float32)
    colors[:] = np.asarray(fallback_color, dtype=np.float32)
    if count == 0 or not gradient:
        return colors.reshape(-1)

    mask = _clip_mask(clipped_mask, count)
    low, high = height_range(values, mask)
    extent = high - low
    flat = extent < FLAT_RANGE_EPSILON
    for index in np.nonzero(~mask)[0]:
        t = 0.5 if flat else (values[index] - low) / extent
        colors[index] = color_from_stops(t, gradient, smoothness)
    return colors.reshape(-1)


def colorize_positions(
    positions: Sequence[Sequence[float]],
    clipped_mask: Sequence[bool],
    gradient: Sequence[ColorStop],
    smoothness: float,
    fallback_color: RGB,
) -> VertexColorBuffer:
    """Colorize a mesh from its ``(n, 3)`` vertex positions (Y is elevation)."""

    array = np.asarray(positions, dtype=float)
    if array.size == 0:
        return np.empty(0, dtype=np.float32)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError("Expected an (n, 3) array of vertex positions")
    return colorize(array[:, 1], clipped_mask, gradient, smoothness, fallback_color)


def _apply_banding(u: float, smoothness: float) -> float:
    if smoothness < HARD_BAND_THRESHOLD:
        return 0.0 if u < 0.5 else 1.0
    if smoothness < SOFT_BAND_THRESHOLD:
        return math.floor(u * BAND_COUNT + 0.5) / BAND_COUNT
    return u


def _clip_mask(clipped_mask: Sequence[bool], count: int) -> NDArray[np.bool_]:
    """Return a boolean mask of length ``count``; missing entries are unclipped."""

    mask = np.zeros(count, dtype=bool)
    provided = np.asarray(clipped_mask, dtype=bool)[:count]
    mask[: provided.shape[0]] = provided
    return mask


__all__ = [
    "VertexColorBuffer",
    "FLAT_RANGE_EPSILON",
    "height_range",
    "color_from_stops",
    "colorize",
    "colorize_positions",
]
