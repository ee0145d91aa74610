"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable route fixtures for the
normalizer, simplifier and colorizer tests to avoid duplication across files.
"""
from __future__ import annotations

import math
import os
import sys
from datetime import datetime, timezone

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from waymarker.models import ColorStop, GeoPoint


# --- Factory helpers -------------------------------------------------
def _make_points(lnglats, elevations=None):
    """Build GeoPoints from ``(lng, lat)`` pairs and optional elevations."""

    elevations = list(elevations or [])
    points = []
    for idx, (lng, lat) in enumerate(lnglats):
        ele = elevations[idx] if idx < len(elevations) else None
        points.append(GeoPoint(longitude=float(lng), latitude=float(lat), elevation=ele))
    return points


def _make_wiggle(count, amplitude=4e-4, period=40.0):
    """Return a sinuous route heading east, similar to a winding trail."""

    return [
        GeoPoint(
            longitude=-3.18 + idx * 1.5e-5,
            latitude=51.48 + amplitude * math.sin(idx / period),
            elevation=100.0 + 25.0 * math.cos(idx / 200.0),
        )
        for idx in range(count)
    ]


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def start_time():
    return datetime(2025, 1, 5, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def square_latlng():
    """Unit square given as (lat, lng) pairs, as activity streams deliver them."""

    return [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]


@pytest.fixture
def wiggle_points():
    return _make_wiggle(2000)


@pytest.fixture
def black_white():
    return [ColorStop(0.0, (0.0, 0.0, 0.0)), ColorStop(1.0, (1.0, 1.0, 1.0))]


@pytest.fixture
def rgb_stops():
    return [
        ColorStop(0.0, (1.0, 0.0, 0.0)),
        ColorStop(0.5, (0.0, 1.0, 0.0)),
        ColorStop(1.0, (0.0, 0.0, 1.0)),
    ]


@pytest.fixture
def make_points():
    return _make_points


@pytest.fixture
def make_wiggle():
    return _make_wiggle
