"""Douglas-Peucker simplification for routes ahead of mesh generation.

Distances are measured in the 2D (longitude, latitude) plane; elevation rides
along on the retained points but never affects which points are kept.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import SIMPLIFY_MAX_ITERATIONS, SIMPLIFY_TARGET_POINTS
from ..models import GeoPoint, RouteData

LOGGER = logging.getLogger(__name__)

PlaneArray = NDArray[np.float64]

# Accept a search result this close (relative) to the requested point count.
_COUNT_TOLERANCE_RATIO = 0.05


def simplify(points: Sequence[GeoPoint], tolerance: float) -> List[GeoPoint]:
    """Return the points retained by Douglas-Peucker at ``tolerance``.

    The first and last points are always kept. An interior point survives when
    its distance from the current chord is strictly greater than
    ``tolerance``; with a tolerance of 0 only exactly collinear points are
    dropped, and a negative tolerance keeps everything. Ties on the maximum
    distance go to the lowest index.
    """

    if len(points) <= 2:
        return list(points)
    keep = _keep_mask(_as_plane_array(points), float(tolerance))
    return [point for point, kept in zip(points, keep) if kept]


def calculate_tolerance(
    points: Sequence[GeoPoint],
    target_count: int,
    max_iterations: int = SIMPLIFY_MAX_ITERATIONS,
) -> float:
    """Binary-search a tolerance that yields roughly ``target_count`` points."""

    tolerance, _ = _search_tolerance(points, target_count, max_iterations)
    return tolerance


def simplify_to_count(
    points: Sequence[GeoPoint],
    target_count: int,
    max_iterations: int = SIMPLIFY_MAX_ITERATIONS,
) -> List[GeoPoint]:
    """Simplify ``points`` towards ``target_count`` points.

    Returns the input unchanged when it has two points or fewer, or is already
    within ``target_count``. Otherwise the
    last simplification computed by the search is returned; it may miss the
    target by more than 5% when the search runs out of iterations.
    """

    if len(points) <= 2 or len(points) <= target_count:
        return list(points)
    _, simplified = _search_tolerance(points, target_count, max_iterations)
    return simplified


def simplify_route(
    route: RouteData,
    target_count: Optional[int] = None,
    *,
    tolerance: Optional[float] = None,
) -> RouteData:
    """Return a new route with reduced points and the original stats/bounds.

    ``tolerance`` takes precedence over ``target_count``; with neither, the
    configured ``SIMPLIFY_TARGET_POINTS`` budget applies.
    """

    if tolerance is not None:
        reduced = simplify(route.points, tolerance)
    else:
        target = SIMPLIFY_TARGET_POINTS if target_count is None else target_count
        reduced = simplify_to_count(route.points, target)
    LOGGER.debug(
        "Simplified route '%s' from %s to %s points",
        route.name,
        len(route.points),
        len(reduced),
    )
    return route.with_points(reduced)


def _search_tolerance(
    points: Sequence[GeoPoint],
    target_count: int,
    max_iterations: int,
) -> Tuple[float, List[GeoPoint]]:
    """Return the accepted tolerance and the simplification computed with it."""

    if len(points) <= 2 or len(points) <= target_count:
        return 0.0, list(points)

    plane = _as_plane_array(points)
    span = plane.max(axis=0) - plane.min(axis=0)
    diagonal = float(math.hypot(span[0], span[1]))

    low = 0.0
    high = diagonal / 10.0
    count = _count_kept(plane, high)
    # Widen the upper bound until it no longer overshoots the target.
    while count > target_count and high < diagonal:
        high *= 2.0
        count = _count_kept(plane, high)

    tolerance = high
    keep = None
    for iteration in range(max(int(max_iterations), 0)):
        tolerance = (low + high) / 2.0
        keep = _keep_mask(plane, tolerance)
        count = int(keep.sum())
        if count == target_count or _close_enough(count, target_count):
            LOGGER.debug(
                "Tolerance %.3g gives %s points (target %s) after %s iterations",
                tolerance,
                count,
                target_count,
                iteration + 1,
            )
            break
        if count > target_count:
            low = tolerance
        else:
            high = tolerance
    else:
        LOGGER.debug(
            "Tolerance search stopped at %.3g without reaching %s points",
            tolerance,
            target_count,
        )

    if keep is None:
        keep = _keep_mask(plane, tolerance)
    return tolerance, [point for point, kept in zip(points, keep) if kept]


def _close_enough(count: int, target_count: int) -> bool:
    return abs(count - target_count) < _COUNT_TOLERANCE_RATIO * target_count


def _count_kept(plane: PlaneArray, tolerance: float) -> int:
    if len(plane) <= 2:
        return len(plane)
    return int(_keep_mask(plane, tolerance).sum())


def _keep_mask(plane: PlaneArray, tolerance: float) -> NDArray[np.bool_]:
    """Run Douglas-Peucker over ``plane`` and return the retained-point mask.

    Uses an explicit stack of ``(start, end)`` ranges so nearly collinear
    input cannot exhaust the interpreter's recursion limit.
    """

    count = len(plane)
    keep = np.zeros(count, dtype=bool)
    if count == 0:
        return keep
    keep[0] = True
    keep[count - 1] = True
    stack: List[Tuple[int, int]] = [(0, count - 1)]
    while stack:
        start, end = stack.pop()
        if end <= start + 1:
            continue
        distances = _segment_distances(plane[start + 1 : end], plane[start], plane[end])
        # argmax returns the first occurrence, so ties resolve to the lowest index.
        offset = int(np.argmax(distances))
        if distances[offset] > tolerance:
            split = start + 1 + offset
            keep[split] = True
            stack.append((split, end))
            stack.append((start, split))
    return keep


def _segment_distances(
    points: PlaneArray, seg_start: NDArray[np.float64], seg_end: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Distance from each point to the segment ``seg_start``-``seg_end``."""

    seg_vec = seg_end - seg_start
    length_sq = float(seg_vec @ seg_vec)
    to_points = points - seg_start
    if length_sq == 0.0:
        return np.linalg.norm(to_points, axis=1)
    t = np.clip((to_points @ seg_vec) / length_sq, 0.0, 1.0)
    nearest = seg_start + t[:, None] * seg_vec
    return np.linalg.norm(points - nearest, axis=1)


def _as_plane_array(points: Sequence[GeoPoint]) -> PlaneArray:
    """Convert points into an ``(n, 2)`` float64 array of ``(lng, lat)``."""

    if not points:
        return np.empty((0, 2), dtype=float)
    return np.asarray([(p.longitude, p.latitude) for p in points], dtype=float)


__all__ = [
    "simplify",
    "simplify_to_count",
    "calculate_tolerance",
    "simplify_route",
]
