"""GeoJSON views of routes for map layers."""

from __future__ import annotations

from typing import Any, Dict

from shapely.geometry import LineString, Point, mapping

from ..errors import EmptyStreamError
from ..models import RouteData


def route_to_geojson(route: RouteData) -> Dict[str, Any]:
    """Return the route as a ``Feature`` wrapping a 3D ``LineString``.

    Missing elevations are written as 0. Single-point routes are emitted as a
    degenerate two-vertex line so map layers can still draw them.
    """

    if route.is_empty:
        raise EmptyStreamError(f"Route '{route.name}' has no points to export")
    coords = [(p.longitude, p.latitude, p.elevation or 0.0) for p in route.points]
    if len(coords) == 1:
        coords = coords * 2
    return {
        "type": "Feature",
        "properties": {
            "name": route.name,
            "distance": route.stats.distance_m,
            "elevationGain": route.stats.elevation_gain_m,
        },
        "geometry": _as_dict(mapping(LineString(coords))),
    }


def route_endpoints_to_geojson(route: RouteData) -> Dict[str, Any]:
    """Return start and end markers as a ``FeatureCollection``."""

    if route.is_empty:
        raise EmptyStreamError(f"Route '{route.name}' has no endpoints")
    start = route.points[0]
    end = route.points[-1]
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"type": "start"},
                "geometry": _as_dict(mapping(Point(start.longitude, start.latitude))),
            },
            {
                "type": "Feature",
                "properties": {"type": "end"},
                "geometry": _as_dict(mapping(Point(end.longitude, end.latitude))),
            },
        ],
    }


def _as_dict(geometry: Dict[str, Any]) -> Dict[str, Any]:
    """Convert shapely's tuple-based mapping into plain JSON lists."""

    return {
        "type": geometry["type"],
        "coordinates": _listify(geometry["coordinates"]),
    }


def _listify(value: Any) -> Any:
    if isinstance(value, (tuple, list)):
        return [_listify(item) for item in value]
    return float(value)


__all__ = ["route_to_geojson", "route_endpoints_to_geojson"]
