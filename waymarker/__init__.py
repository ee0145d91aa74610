"""Waymarker route core: route normalization, simplification and terrain coloring."""

from .errors import DecodeError, EmptyStreamError, RouteImportError, WaymarkerError
from .geometry.polyline import decode as decode_polyline
from .geometry.simplify import simplify, simplify_route, simplify_to_count
from .models import BoundingBox, ColorStop, GeoPoint, RouteData, RouteStatistics
from .routes.normalizer import normalize, normalize_strava_activity
from .terrain.colorize import colorize

__all__ = [
    "BoundingBox",
    "ColorStop",
    "GeoPoint",
    "RouteData",
    "RouteStatistics",
    "decode_polyline",
    "normalize",
    "normalize_strava_activity",
    "simplify",
    "simplify_to_count",
    "simplify_route",
    "colorize",
    "WaymarkerError",
    "DecodeError",
    "EmptyStreamError",
    "RouteImportError",
]
