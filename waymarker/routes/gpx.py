"""GPX import producing :class:`RouteData`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import gpxpy
import gpxpy.gpx

from ..errors import EmptyStreamError, RouteImportError
from ..models import GeoPoint, RouteData, RouteStatistics
from .normalizer import compute_bounds, compute_distance, compute_elevation_loss

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_gpx_file(path: PathLike) -> RouteData:
    """Read a GPX file from disk and return its route."""

    with open(path, "r", encoding="utf-8") as handle:
        text = handle.read()
    return parse_gpx_string(text, default_name=Path(path).stem)


def parse_gpx_string(text: str, *, default_name: str = "") -> RouteData:
    """Parse GPX content, preferring tracks, then routes, then waypoints.

    Raises:
        RouteImportError: If the document is not valid GPX.
        EmptyStreamError: If the document holds no points at all.
    """

    try:
        document = gpxpy.parse(text)
    except gpxpy.gpx.GPXException as exc:
        raise RouteImportError(f"Failed to parse GPX file: {exc}") from exc

    name = document.name or None
    description = document.description or None

    if document.tracks:
        track = document.tracks[0]
        points = [
            _to_point(p) for segment in track.segments for p in segment.points
        ]
        if points:
            return _build(
                name or track.name or default_name,
                description or track.description,
                points,
                _track_stats(track),
            )

    if document.routes:
        route = document.routes[0]
        points = [_to_point(p) for p in route.points]
        if points:
            return _build(
                name or route.name or default_name,
                description or route.description,
                points,
                _local_stats(points),
            )

    points = [_to_point(p) for p in document.waypoints]
    if not points:
        raise EmptyStreamError("No route data found in GPX file")
    LOGGER.info("GPX has no tracks or routes; using %s waypoints", len(points))
    return _build(name or default_name, description, points, RouteStatistics())


def _to_point(raw: gpxpy.gpx.GPXTrackPoint) -> GeoPoint:
    return GeoPoint(
        longitude=float(raw.longitude),
        latitude=float(raw.latitude),
        elevation=float(raw.elevation) if raw.elevation is not None else None,
        time=raw.time,
    )


def _build(
    name: str,
    description: Optional[str],
    points: List[GeoPoint],
    stats: RouteStatistics,
) -> RouteData:
    return RouteData(
        name=name or "",
        points=tuple(points),
        stats=stats,
        bounds=compute_bounds(points),
        description=description,
    )


def _track_stats(track: gpxpy.gpx.GPXTrack) -> RouteStatistics:
    """Stats from gpxpy's own track aggregates."""

    uphill, downhill = track.get_uphill_downhill()
    extremes = track.get_elevation_extremes()
    bounds = track.get_time_bounds()
    duration = track.get_duration()
    return RouteStatistics(
        distance_m=float(round(track.length_2d() or 0.0)),
        elevation_gain_m=float(round(uphill or 0.0)),
        elevation_loss_m=float(round(abs(downhill or 0.0))),
        min_elevation_m=float(round(extremes.minimum or 0.0)),
        max_elevation_m=float(round(extremes.maximum or 0.0)),
        duration_s=float(duration or 0.0),
        start_time=bounds.start_time,
        end_time=bounds.end_time,
    )


def _local_stats(points: List[GeoPoint]) -> RouteStatistics:
    """Stats for GPX routes, which carry no precomputed aggregates."""

    elevations = [p.elevation for p in points if p.elevation is not None]
    times = [p.time for p in points if p.time is not None]
    start = min(times) if times else None
    end = max(times) if times else None
    return RouteStatistics(
        distance_m=float(round(compute_distance(points))),
        elevation_gain_m=float(round(_elevation_gain(elevations))),
        elevation_loss_m=float(round(compute_elevation_loss(elevations))),
        min_elevation_m=float(round(min(elevations))) if elevations else 0.0,
        max_elevation_m=float(round(max(elevations))) if elevations else 0.0,
        duration_s=(end - start).total_seconds() if start and end else 0.0,
        start_time=start,
        end_time=end,
    )


def _elevation_gain(samples: Iterable[float]) -> float:
    values = list(samples)
    return sum(max(b - a, 0.0) for a, b in zip(values, values[1:]))


__all__ = ["parse_gpx_file", "parse_gpx_string"]
