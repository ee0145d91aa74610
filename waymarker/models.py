"""Dataclasses describing routes, their statistics and gradient stops."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, Optional, Tuple

LngLat = Tuple[float, float]
LatLon = Tuple[float, float]
RGB = Tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Immutable route vertex.

    Equality compares longitude, latitude and elevation, treating elevation as
    the third coordinate. The optional timestamp is ignored.
    """

    longitude: float
    latitude: float
    elevation: Optional[float] = None
    time: Optional[datetime] = field(default=None, compare=False)

    @property
    def lnglat(self) -> LngLat:
        return self.longitude, self.latitude

    @property
    def latlon(self) -> LatLon:
        return self.latitude, self.longitude


@dataclass(frozen=True, slots=True)
class RouteStatistics:
    """Derived route totals. Recomputed wholesale when points change."""

    distance_m: float = 0.0
    elevation_gain_m: float = 0.0
    elevation_loss_m: float = 0.0
    min_elevation_m: float = 0.0
    max_elevation_m: float = 0.0
    duration_s: float = 0.0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """South-west and north-east corners as ``(lng, lat)`` pairs."""

    southwest: LngLat
    northeast: LngLat

    @classmethod
    def empty(cls) -> "BoundingBox":
        return cls((0.0, 0.0), (0.0, 0.0))

    @property
    def west(self) -> float:
        return self.southwest[0]

    @property
    def south(self) -> float:
        return self.southwest[1]

    @property
    def east(self) -> float:
        return self.northeast[0]

    @property
    def north(self) -> float:
        return self.northeast[1]

    @property
    def center(self) -> LatLon:
        """Return the box centre as ``(lat, lon)`` for map viewports."""

        return (self.south + self.north) / 2.0, (self.west + self.east) / 2.0


@dataclass(frozen=True, slots=True)
class RouteData:
    """Canonical route: ordered points, derived statistics and bounds.

    ``points`` is stored as a tuple so downstream consumers get a read-only
    view. A changed route is a new ``RouteData``; use :meth:`with_points`.
    """

    name: str
    points: Tuple[GeoPoint, ...]
    stats: RouteStatistics
    bounds: BoundingBox
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points

    def with_points(self, points: Iterable[GeoPoint]) -> "RouteData":
        """Return a copy carrying ``points`` and the existing stats/bounds."""

        return replace(self, points=tuple(points))


@dataclass(frozen=True, slots=True)
class ColorStop:
    """Gradient anchor: a position in ``[0, 1]`` and an RGB color."""

    position: float
    color: RGB

    @classmethod
    def from_hex(cls, position: float, value: str) -> "ColorStop":
        return cls(float(position), parse_hex_color(value))


def parse_hex_color(value: str) -> RGB:
    """Convert ``#rgb`` or ``#rrggbb`` into floats in ``[0, 1]``."""

    text = value.strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ValueError(f"Invalid hex color: {value!r}")
    try:
        channels = [int(text[i : i + 2], 16) for i in (0, 2, 4)]
    except ValueError as exc:
        raise ValueError(f"Invalid hex color: {value!r}") from exc
    return channels[0] / 255.0, channels[1] / 255.0, channels[2] / 255.0


__all__ = [
    "LngLat",
    "LatLon",
    "RGB",
    "GeoPoint",
    "RouteStatistics",
    "BoundingBox",
    "RouteData",
    "ColorStop",
    "parse_hex_color",
]
