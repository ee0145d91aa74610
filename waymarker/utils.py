"""Display formatting helpers shared across modules."""

from __future__ import annotations


def format_distance(meters: float) -> str:
    """Format metres as ``"850 m"`` or ``"12.3 km"``."""

    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.1f} km"


def format_elevation(meters: float) -> str:
    return f"{round(meters)} m"


def format_duration(seconds: float) -> str:
    """Format seconds into a ``Xh Ym`` or ``Y min`` string."""

    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes} min"
