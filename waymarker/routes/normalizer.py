"""Turn raw activity streams into canonical :class:`RouteData`."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence, TypeVar

from pyproj import Geod

from ..errors import EmptyStreamError
from ..geometry.polyline import decode as decode_polyline
from ..models import (
    BoundingBox,
    GeoPoint,
    LatLon,
    RouteData,
    RouteStatistics,
)

LOGGER = logging.getLogger(__name__)

_GEOD = Geod(ellps="WGS84")

T = TypeVar("T")


def normalize(
    name: str,
    latlng: Sequence[Sequence[float]],
    elevation: Optional[Sequence[float]] = None,
    elapsed_s: Optional[Sequence[float]] = None,
    *,
    start_time: Optional[datetime],
    aggregate_elevation_gain_m: Optional[float] = None,
    aggregate_duration_s: float = 0.0,
    aggregate_distance_m: Optional[float] = None,
    require_points: bool = False,
    description: Optional[str] = None,
) -> RouteData:
    """Build a :class:`RouteData` from parallel coordinate/elevation/time arrays.

    Arrays are zipped by index. ``elevation`` and ``elapsed_s`` may be shorter
    than ``latlng`` (or missing); the points past their end simply carry no
    elevation or time.

    Elevation gain is taken from ``aggregate_elevation_gain_m`` as reported by
    the source, while elevation loss is summed locally from the samples.

    Raises:
        EmptyStreamError: If ``require_points`` is set and ``latlng`` is empty.
    """

    elevations = list(elevation) if elevation is not None else []
    times = list(elapsed_s) if elapsed_s is not None else []
    if require_points and len(latlng) == 0:
        raise EmptyStreamError(f"Route '{name}' has no GPS points")
    if len(latlng) and len(elevations) not in (0, len(latlng)):
        LOGGER.warning(
            "Elevation stream length %s differs from %s GPS points for route '%s'",
            len(elevations),
            len(latlng),
            name,
        )
    if len(latlng) and len(times) not in (0, len(latlng)):
        LOGGER.warning(
            "Time stream length %s differs from %s GPS points for route '%s'",
            len(times),
            len(latlng),
            name,
        )

    points: List[GeoPoint] = []
    for idx, pair in enumerate(latlng):
        lat, lon = pair[0], pair[1]
        offset = _optional_at(times, idx)
        stamp = None
        if start_time is not None and offset is not None:
            stamp = start_time + timedelta(seconds=float(offset))
        alt = _optional_at(elevations, idx)
        points.append(
            GeoPoint(
                longitude=float(lon),
                latitude=float(lat),
                elevation=float(alt) if alt is not None else None,
                time=stamp,
            )
        )

    if aggregate_distance_m is not None:
        distance = float(aggregate_distance_m)
    else:
        distance = compute_distance(points)

    end_time = None
    if start_time is not None and times:
        end_time = start_time + timedelta(seconds=float(times[-1]))

    stats = RouteStatistics(
        distance_m=distance,
        elevation_gain_m=float(aggregate_elevation_gain_m or 0.0),
        elevation_loss_m=compute_elevation_loss(elevations),
        min_elevation_m=float(min(elevations)) if elevations else 0.0,
        max_elevation_m=float(max(elevations)) if elevations else 0.0,
        duration_s=float(aggregate_duration_s or 0.0),
        start_time=start_time,
        end_time=end_time,
    )
    LOGGER.debug(
        "Normalized route '%s': %s points, %.1f m", name, len(points), distance
    )
    return RouteData(
        name=name,
        points=tuple(points),
        stats=stats,
        bounds=compute_bounds(points),
        description=description,
    )


def compute_elevation_loss(samples: Sequence[float]) -> float:
    """Sum the drops between consecutive elevation samples."""

    loss = 0.0
    for previous, current in zip(samples, samples[1:]):
        drop = float(previous) - float(current)
        if drop > 0:
            loss += drop
    return loss


def compute_bounds(points: Iterable[GeoPoint]) -> BoundingBox:
    """Return the bounding box of ``points``; the empty box when there are none."""

    north = -90.0
    south = 90.0
    east = -180.0
    west = 180.0
    seen = False
    for point in points:
        seen = True
        if point.latitude > north:
            north = point.latitude
        if point.latitude < south:
            south = point.latitude
        if point.longitude > east:
            east = point.longitude
        if point.longitude < west:
            west = point.longitude
    if not seen:
        return BoundingBox.empty()
    return BoundingBox(southwest=(west, south), northeast=(east, north))


def compute_distance(points: Sequence[GeoPoint]) -> float:
    """Return the geodesic length of ``points`` in metres on the WGS84 ellipsoid."""

    if len(points) < 2:
        return 0.0
    lons = [point.longitude for point in points]
    lats = [point.latitude for point in points]
    return float(_GEOD.line_length(lons, lats))


def normalize_strava_activity(
    activity: Mapping[str, Any],
    streams: Mapping[str, Any],
    *,
    require_points: bool = False,
) -> RouteData:
    """Adapt a Strava activity summary and its streams onto :func:`normalize`.

    ``streams`` may hold either bare lists or Strava's ``{"data": [...]}``
    wrappers under the ``latlng``, ``altitude`` and ``time`` keys.
    """

    latlng = _stream_data(streams, "latlng")
    altitude = _stream_data(streams, "altitude")
    elapsed = _stream_data(streams, "time")
    gain = activity.get("total_elevation_gain")
    distance = activity.get("distance")
    return normalize(
        str(activity.get("name") or ""),
        latlng,
        altitude,
        elapsed,
        start_time=_parse_start_time(activity.get("start_date")),
        aggregate_elevation_gain_m=float(gain) if gain is not None else None,
        aggregate_duration_s=float(activity.get("moving_time") or 0.0),
        aggregate_distance_m=float(distance) if distance is not None else None,
        require_points=require_points,
    )


def summary_polyline_points(activity: Mapping[str, Any]) -> List[LatLon]:
    """Decode the activity's ``map.summary_polyline`` preview, if present."""

    map_payload = activity.get("map") or {}
    encoded = map_payload.get("summary_polyline") or map_payload.get("polyline")
    if not encoded:
        return []
    return decode_polyline(encoded)


def _optional_at(values: Sequence[T], index: int) -> Optional[T]:
    """Return ``values[index]`` or ``None`` when the index is out of range."""

    if 0 <= index < len(values):
        return values[index]
    return None


def _stream_data(streams: Mapping[str, Any], key: str) -> List[Any]:
    """Return the data list for ``key`` regardless of the stream wrapper shape."""

    entry = streams.get(key)
    if entry is None:
        return []
    if isinstance(entry, Mapping):
        entry = entry.get("data") or []
    return list(entry)


def _parse_start_time(value: Any) -> Optional[datetime]:
    """Parse Strava's ISO-8601 ``start_date`` (``Z`` suffix) into an aware datetime."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = [
    "normalize",
    "normalize_strava_activity",
    "summary_polyline_points",
    "compute_bounds",
    "compute_distance",
    "compute_elevation_loss",
]
