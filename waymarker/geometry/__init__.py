"""Route geometry: polyline codec, simplification, GeoJSON and map overlays.

The folium overlay lives in :mod:`.visualization` and is imported on demand so
the core helpers stay light.
"""

from .geojson import route_endpoints_to_geojson, route_to_geojson
from .polyline import decode, encode
from .simplify import calculate_tolerance, simplify, simplify_route, simplify_to_count

__all__ = [
    "decode",
    "encode",
    "simplify",
    "simplify_to_count",
    "calculate_tolerance",
    "simplify_route",
    "route_to_geojson",
    "route_endpoints_to_geojson",
]
