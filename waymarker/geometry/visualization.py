"""Utilities for visualising original and simplified routes on a map."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import folium  # Using folium to build an interactive Leaflet map.

from ..errors import EmptyStreamError
from ..models import RouteData
from ..utils import format_distance, format_elevation

PathLike = Union[str, Path]

_ORIGINAL_COLOR = "#2c7bb6"
_SIMPLIFIED_COLOR = "#d73027"
_START_COLOR = "#1a9641"


def create_route_overlay(
    original: RouteData,
    simplified: Optional[RouteData] = None,
    *,
    show_original: bool = True,
    output_html_path: Optional[PathLike] = None,
) -> folium.Map:
    """Create an interactive map comparing a route with its simplified form.

    Args:
        original: Route as imported.
        simplified: Optional reduced route drawn on top of the original.
        show_original: Draw the unsimplified route underneath.
        output_html_path: Optional path to persist the resulting map as an HTML file.

    Returns:
        A :class:`folium.Map` instance containing the overlay.

    Raises:
        EmptyStreamError: If ``original`` has no points.
    """

    if original.is_empty:
        raise EmptyStreamError(f"Route '{original.name}' has no points to draw")

    folium_map = folium.Map(
        location=original.bounds.center, zoom_start=13, control_scale=True
    )
    folium_map.fit_bounds(
        [
            (original.bounds.south, original.bounds.west),
            (original.bounds.north, original.bounds.east),
        ]
    )
    if show_original or simplified is None:
        folium.PolyLine(
            [p.latlon for p in original.points],
            color=_ORIGINAL_COLOR,
            weight=4,
            opacity=0.5,
            tooltip=f"Original ({len(original.points)} points)",
        ).add_to(folium_map)
    if simplified is not None and len(simplified.points) >= 2:
        folium.PolyLine(
            [p.latlon for p in simplified.points],
            color=_SIMPLIFIED_COLOR,
            weight=3,
            opacity=0.9,
            tooltip=f"Simplified ({len(simplified.points)} points)",
        ).add_to(folium_map)

    stats = original.stats
    popup = folium.Popup(
        html=(
            f"<strong>{original.name or 'Route'}</strong><br>"
            f"{format_distance(stats.distance_m)}, "
            f"+{format_elevation(stats.elevation_gain_m)} / "
            f"-{format_elevation(stats.elevation_loss_m)}"
        ),
        max_width=300,
    )
    folium.CircleMarker(
        location=original.points[0].latlon,
        radius=6,
        color=_START_COLOR,
        fill=True,
        fill_color=_START_COLOR,
        tooltip="Start",
        popup=popup,
    ).add_to(folium_map)

    if output_html_path is not None:
        output_path = Path(output_html_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        folium_map.save(str(output_path))

    return folium_map


__all__ = ["create_route_overlay"]
