"""Route import and normalization into :class:`~waymarker.models.RouteData`."""

from .gpx import parse_gpx_file, parse_gpx_string
from .normalizer import (
    compute_bounds,
    compute_distance,
    compute_elevation_loss,
    normalize,
    normalize_strava_activity,
    summary_polyline_points,
)

__all__ = [
    "normalize",
    "normalize_strava_activity",
    "summary_polyline_points",
    "compute_bounds",
    "compute_distance",
    "compute_elevation_loss",
    "parse_gpx_file",
    "parse_gpx_string",
]
