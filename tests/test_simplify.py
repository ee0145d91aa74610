"""Tests for Douglas-Peucker route simplification."""

from __future__ import annotations

import numpy as np
import pytest

from waymarker.geometry.simplify import (
    calculate_tolerance,
    simplify,
    simplify_route,
    simplify_to_count,
)
from waymarker.models import GeoPoint
from waymarker.routes.normalizer import normalize


def _random_walk(count: int, seed: int = 7) -> list[GeoPoint]:
    """Return a seeded GPS-like random walk with dense detail at every scale."""

    rng = np.random.default_rng(seed)
    steps = rng.normal(scale=1e-4, size=(count, 2))
    coords = np.cumsum(steps, axis=0) + np.array([-3.18, 51.48])
    return [GeoPoint(float(lng), float(lat)) for lng, lat in coords]


def test_short_inputs_are_returned_unchanged(make_points) -> None:
    one = make_points([(0, 0)])
    two = make_points([(0, 0), (5, 5)])

    assert simplify([], 1.0) == []
    assert simplify(one, 1.0) == one
    assert simplify(two, 100.0) == two


def test_point_kept_only_when_distance_strictly_exceeds_tolerance(make_points) -> None:
    points = make_points([(0, 0), (1, 1), (2, 0)])

    assert len(simplify(points, 0.5)) == 3
    assert len(simplify(points, 1.0)) == 2
    assert len(simplify(points, 1.5)) == 2


def test_endpoints_always_preserved(wiggle_points) -> None:
    for tolerance in (0.0, 1e-6, 1e-4, 1.0, 100.0):
        result = simplify(wiggle_points, tolerance)
        assert result[0] == wiggle_points[0]
        assert result[-1] == wiggle_points[-1]


def test_zero_tolerance_drops_only_exactly_collinear_points(make_points) -> None:
    collinear = make_points([(0, 0), (1, 0), (2, 0)])
    zigzag = make_points([(0, 0), (1, 0.5), (2, 0), (3, 0.5), (4, 0)])

    assert simplify(collinear, 0.0) == [collinear[0], collinear[2]]
    assert simplify(zigzag, 0.0) == zigzag


def test_negative_tolerance_keeps_everything(make_points) -> None:
    collinear = make_points([(0, 0), (1, 0), (2, 0), (3, 0)])

    assert simplify(collinear, -1.0) == collinear


def test_ties_resolve_to_lowest_index(make_points) -> None:
    """Both interior points sit exactly 1.0 from the chord; the first one wins."""

    a, b, c, d = make_points([(0, 0), (1, 1), (2, 1), (3, 0)])

    assert simplify([a, b, c, d], 0.5) == [a, b, d]


def test_degenerate_chord_uses_point_distance(make_points) -> None:
    """Closed loops have identical endpoints; distance falls back to Euclidean."""

    loop = make_points([(0, 0), (2, 0), (0, 0)])

    assert len(simplify(loop, 1.0)) == 3
    assert len(simplify(loop, 3.0)) == 2


def test_elevation_is_carried_but_ignored_by_distance(make_points) -> None:
    flat = make_points([(0, 0), (1, 0.2), (2, 0), (3, 0.9), (4, 0)])
    hilly = make_points(
        [(0, 0), (1, 0.2), (2, 0), (3, 0.9), (4, 0)],
        elevations=[0.0, 5000.0, 10.0, 20.0, 30.0],
    )

    flat_result = simplify(flat, 0.3)
    hilly_result = simplify(hilly, 0.3)

    assert [p.lnglat for p in flat_result] == [p.lnglat for p in hilly_result]
    assert [p.elevation for p in hilly_result] == [0.0, 10.0, 20.0, 30.0]


def test_result_size_is_monotonic_in_tolerance(wiggle_points) -> None:
    tolerances = [0.0, 1e-7, 1e-6, 5e-6, 1e-5, 5e-5, 1e-4, 5e-4, 1e-2]
    sizes = [len(simplify(wiggle_points, t)) for t in tolerances]

    assert sizes == sorted(sizes, reverse=True)
    assert sizes[-1] == 2


def test_long_nearly_collinear_input_does_not_recurse() -> None:
    """Deep splits run on an explicit stack rather than Python recursion."""

    points = [GeoPoint(idx * 1e-5, (idx % 2) * 1e-9) for idx in range(6000)]

    assert simplify(points, -1.0) == points
    assert len(simplify(points, 1e-8)) == 2


def test_simplify_to_count_returns_input_when_small_enough(make_points) -> None:
    points = make_points([(0, 0), (1, 1), (2, 0)])

    assert simplify_to_count(points, 3) == points
    assert simplify_to_count(points, 10) == points
    assert calculate_tolerance(points, 10) == 0.0


def test_simplify_to_count_converges_within_five_percent() -> None:
    points = _random_walk(3000)

    result = simplify_to_count(points, 200)

    assert abs(len(result) - 200) < 10
    assert result[0] == points[0]
    assert result[-1] == points[-1]


def test_simplify_to_count_matches_tolerance_search(wiggle_points) -> None:
    tolerance = calculate_tolerance(wiggle_points, 150)

    assert tolerance > 0
    assert simplify_to_count(wiggle_points, 150) == simplify(wiggle_points, tolerance)


def test_simplify_to_count_without_iterations_uses_upper_bound(wiggle_points) -> None:
    """With no refinement left the last computed result is still returned."""

    result = simplify_to_count(wiggle_points, 150, max_iterations=0)

    assert 2 <= len(result) <= 150


def test_simplify_to_count_with_identical_points() -> None:
    points = [GeoPoint(1.0, 1.0)] * 10

    result = simplify_to_count(points, 3)

    assert result == [points[0], points[-1]]


def test_simplify_to_count_tolerates_zero_target(make_wiggle) -> None:
    result = simplify_to_count(make_wiggle(300), 0)

    assert len(result) == 2


@pytest.mark.parametrize("target", [-1, 0, 1])
def test_simplify_to_count_short_inputs_never_raise(make_points, target: int) -> None:
    pair = make_points([(0.0, 0.0), (1.0, 1.0)])

    assert simplify_to_count([], target) == []
    assert simplify_to_count(pair[:1], target) == pair[:1]
    assert simplify_to_count(pair, target) == pair
    assert calculate_tolerance([], target) == 0.0


def test_simplify_route_returns_new_route(start_time, make_wiggle) -> None:
    latlng = [(p.latitude, p.longitude) for p in make_wiggle(800)]
    route = normalize("Trail", latlng, start_time=start_time)

    reduced = simplify_route(route, 100)
    by_tolerance = simplify_route(route, tolerance=1.0)

    assert len(route.points) == 800
    assert len(reduced.points) < 800
    assert reduced.stats == route.stats
    assert reduced.bounds == route.bounds
    assert reduced.name == "Trail"
    assert len(by_tolerance.points) == 2
