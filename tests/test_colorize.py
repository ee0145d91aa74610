"""Tests for elevation-based terrain coloring."""

from __future__ import annotations

import numpy as np
import pytest

from waymarker.models import ColorStop
from waymarker.terrain.colorize import (
    color_from_stops,
    colorize,
    colorize_positions,
    height_range,
)

FALLBACK = (0.545, 0.451, 0.333)


def _triplets(buffer: np.ndarray) -> np.ndarray:
    return buffer.reshape(-1, 3)


def test_buffer_is_flat_float32_and_index_aligned(black_white) -> None:
    colors = colorize([0.0, 5.0, 10.0], [False] * 3, black_white, 1.0, FALLBACK)

    assert colors.dtype == np.float32
    assert colors.shape == (9,)
    np.testing.assert_allclose(
        _triplets(colors), [[0, 0, 0], [0.5, 0.5, 0.5], [1, 1, 1]], atol=1e-6
    )


def test_clipped_vertices_always_use_fallback(black_white) -> None:
    colors = colorize(
        [0.0, 1000.0, 10.0],
        [False, True, False],
        black_white,
        1.0,
        FALLBACK,
    )

    np.testing.assert_allclose(_triplets(colors)[1], FALLBACK, atol=1e-6)
    # The clipped 1000 m vertex does not stretch the height range.
    np.testing.assert_allclose(_triplets(colors)[2], [1, 1, 1], atol=1e-6)


def test_empty_gradient_uses_fallback_everywhere() -> None:
    colors = colorize([0.0, 10.0], [False, False], [], 1.0, FALLBACK)

    np.testing.assert_allclose(_triplets(colors), [FALLBACK, FALLBACK], atol=1e-6)


def test_all_clipped_mesh_is_fallback_colored(black_white) -> None:
    colors = colorize([3.0, 4.0], [True, True], black_white, 1.0, FALLBACK)

    np.testing.assert_allclose(_triplets(colors), [FALLBACK, FALLBACK], atol=1e-6)


def test_empty_mesh_gives_empty_buffer(black_white) -> None:
    colors = colorize([], [], black_white, 1.0, FALLBACK)

    assert colors.dtype == np.float32
    assert colors.size == 0


def test_flat_terrain_uses_gradient_midpoint(rgb_stops) -> None:
    colors = colorize([7.0, 7.00001, 7.0], [False] * 3, rgb_stops, 1.0, FALLBACK)

    np.testing.assert_allclose(_triplets(colors), [[0, 1, 0]] * 3, atol=1e-6)


@pytest.mark.parametrize(
    ("smoothness", "expected"),
    [
        (0.1, 0.0),  # hard snap: u < 0.5 -> low stop
        (0.5, 0.4),  # five bands: round(0.4 * 5) / 5
        (0.9, 0.4),  # continuous
    ],
)
def test_banding_thresholds(black_white, smoothness: float, expected: float) -> None:
    colors = colorize([0.0, 4.0, 10.0], [False] * 3, black_white, smoothness, FALLBACK)

    np.testing.assert_allclose(_triplets(colors)[1], [expected] * 3, atol=1e-6)


def test_band_quantization_rounds_half_up(black_white) -> None:
    """0.3 * 5 = 1.5 lands on the upper band, as does u = 0.5 for a hard snap."""

    assert color_from_stops(0.3, black_white, 0.5)[0] == pytest.approx(0.4)
    assert color_from_stops(0.5, black_white, 0.0)[0] == pytest.approx(1.0)
    assert color_from_stops(0.49, black_white, 0.0)[0] == pytest.approx(0.0)


def test_threshold_boundaries_select_next_mode(black_white) -> None:
    assert color_from_stops(0.37, black_white, 0.3)[0] == pytest.approx(0.4)
    assert color_from_stops(0.37, black_white, 0.7)[0] == pytest.approx(0.37)


def test_brackets_interior_stop_pair(rgb_stops) -> None:
    assert color_from_stops(0.75, rgb_stops, 1.0) == pytest.approx((0.0, 0.5, 0.5))
    assert color_from_stops(0.25, rgb_stops, 1.0) == pytest.approx((0.5, 0.5, 0.0))
    assert color_from_stops(0.5, rgb_stops, 1.0) == pytest.approx((0.0, 1.0, 0.0))


def test_queries_outside_stop_span_clamp_to_end_stops() -> None:
    stops = [
        ColorStop(0.2, (1.0, 0.0, 0.0)),
        ColorStop(0.5, (0.0, 1.0, 0.0)),
        ColorStop(0.8, (0.0, 0.0, 1.0)),
    ]

    assert color_from_stops(0.05, stops, 1.0) == pytest.approx((1.0, 0.0, 0.0))
    assert color_from_stops(0.95, stops, 1.0) == pytest.approx((0.0, 0.0, 1.0))
    assert color_from_stops(-3.0, stops, 1.0) == pytest.approx((1.0, 0.0, 0.0))
    assert color_from_stops(7.0, stops, 1.0) == pytest.approx((0.0, 0.0, 1.0))


def test_out_of_order_stops_use_first_bracketing_pair() -> None:
    stops = [
        ColorStop(0.0, (0.0, 0.0, 0.0)),
        ColorStop(1.0, (1.0, 1.0, 1.0)),
        ColorStop(0.5, (0.0, 0.0, 0.0)),
    ]

    assert color_from_stops(0.8, stops, 1.0)[0] == pytest.approx(0.8)


def test_unbracketed_query_falls_back_to_end_stops() -> None:
    stops = [
        ColorStop(0.6, (1.0, 0.0, 0.0)),
        ColorStop(0.4, (0.0, 0.0, 1.0)),
    ]

    assert color_from_stops(0.1, stops, 1.0) == pytest.approx((1.0, 0.0, 0.0))
    assert color_from_stops(0.9, stops, 1.0) == pytest.approx((0.0, 0.0, 1.0))


def test_single_stop_and_shared_positions() -> None:
    single = [ColorStop(0.5, (0.2, 0.4, 0.6))]
    shared = [ColorStop(0.0, (1.0, 1.0, 1.0)), ColorStop(0.0, (0.0, 0.0, 0.0))]

    assert color_from_stops(0.9, single, 1.0) == pytest.approx((0.2, 0.4, 0.6))
    assert color_from_stops(0.0, shared, 1.0) == pytest.approx((1.0, 1.0, 1.0))


def test_height_range_skips_clipped_vertices() -> None:
    assert height_range([1.0, 50.0, 3.0, -20.0], [False, False, False, True]) == (
        1.0,
        50.0,
    )
    assert height_range([1.0, 2.0], [True, True]) == (0.0, 0.0)
    assert height_range([], []) == (0.0, 0.0)


def test_short_clip_mask_treats_missing_entries_as_unclipped(black_white) -> None:
    colors = colorize([0.0, 10.0], [True], black_white, 1.0, FALLBACK)

    np.testing.assert_allclose(_triplets(colors)[0], FALLBACK, atol=1e-6)
    # Only one unclipped vertex: the range collapses and t defaults to 0.5.
    np.testing.assert_allclose(_triplets(colors)[1], [0.5, 0.5, 0.5], atol=1e-6)


def test_colorize_positions_reads_y_column(black_white) -> None:
    positions = [[0.0, 0.0, 9.0], [1.0, 2.0, -4.0], [2.0, 1.0, 0.0]]

    colors = colorize_positions(positions, [False] * 3, black_white, 1.0, FALLBACK)

    np.testing.assert_allclose(
        _triplets(colors), [[0, 0, 0], [1, 1, 1], [0.5, 0.5, 0.5]], atol=1e-6
    )


def test_colorize_positions_rejects_wrong_shape(black_white) -> None:
    with pytest.raises(ValueError):
        colorize_positions([[0.0, 1.0]], [False], black_white, 1.0, FALLBACK)
