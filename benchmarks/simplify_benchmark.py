"""Benchmark route simplification and terrain coloring with large inputs."""

from __future__ import annotations

import argparse
import math
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from waymarker.config import SIMPLIFY_TARGET_POINTS  # noqa: E402
from waymarker.geometry.simplify import simplify, simplify_to_count  # noqa: E402
from waymarker.models import GeoPoint  # noqa: E402
from waymarker.terrain.presets import (  # noqa: E402
    TerrainColorization,
    colorize_terrain,
)


@dataclass(slots=True)
class StageDurations:
    """Timing measurements (in seconds) for one benchmark iteration."""

    simplify_wiggle: float
    simplify_collinear: float
    simplify_to_count: float
    colorize: float

    @property
    def total(self) -> float:
        """Return the aggregate duration for this benchmark iteration."""

        return (
            self.simplify_wiggle
            + self.simplify_collinear
            + self.simplify_to_count
            + self.colorize
        )


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    point_count: int
    iterations: int
    mean_simplify_wiggle_ms: float
    mean_simplify_collinear_ms: float
    mean_simplify_to_count_ms: float
    mean_colorize_ms: float
    mean_total_ms: float
    worst_total_ms: float


def _build_wiggle(point_count: int) -> List[GeoPoint]:
    """Generate a sinuous route similar to a winding trail."""

    return [
        GeoPoint(
            longitude=-122.0 + idx * 1.2e-5,
            latitude=37.0 + 4e-4 * math.sin(idx / 40.0),
            elevation=100.0 + 30.0 * math.cos(idx / 300.0),
        )
        for idx in range(point_count)
    ]


def _build_collinear(point_count: int) -> List[GeoPoint]:
    """Generate a nearly collinear route that drives the worst-case split depth."""

    return [
        GeoPoint(longitude=-122.0 + idx * 1e-5, latitude=37.0 + (idx % 2) * 1e-12)
        for idx in range(point_count)
    ]


def _run_iteration(
    wiggle: List[GeoPoint], collinear: List[GeoPoint]
) -> StageDurations:
    """Execute one benchmark iteration and capture per-stage timings."""

    start = time.perf_counter()
    simplify(wiggle, 1e-5)
    simplify_wiggle = time.perf_counter() - start

    start = time.perf_counter()
    simplify(collinear, 0.0)
    simplify_collinear = time.perf_counter() - start

    start = time.perf_counter()
    reduced = simplify_to_count(wiggle, SIMPLIFY_TARGET_POINTS)
    if len(reduced) < 2:
        raise RuntimeError("Simplification dropped the route endpoints")
    to_count = time.perf_counter() - start

    elevations = [p.elevation or 0.0 for p in wiggle]
    clipped = [idx % 7 == 0 for idx in range(len(elevations))]
    config = TerrainColorization()
    start = time.perf_counter()
    colorize_terrain(elevations, clipped, config)
    colorize_dur = time.perf_counter() - start

    return StageDurations(
        simplify_wiggle=simplify_wiggle,
        simplify_collinear=simplify_collinear,
        simplify_to_count=to_count,
        colorize=colorize_dur,
    )


def run_benchmark(point_count: int, iterations: int) -> BenchmarkSummary:
    """Benchmark the route pipeline and return aggregated timings."""

    if point_count < 1000:
        raise ValueError("point_count must be at least 1,000")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    wiggle = _build_wiggle(point_count)
    collinear = _build_collinear(point_count)
    durations = [_run_iteration(wiggle, collinear) for _ in range(iterations)]

    return BenchmarkSummary(
        point_count=point_count,
        iterations=iterations,
        mean_simplify_wiggle_ms=statistics.fmean(
            d.simplify_wiggle for d in durations
        )
        * 1000.0,
        mean_simplify_collinear_ms=statistics.fmean(
            d.simplify_collinear for d in durations
        )
        * 1000.0,
        mean_simplify_to_count_ms=statistics.fmean(
            d.simplify_to_count for d in durations
        )
        * 1000.0,
        mean_colorize_ms=statistics.fmean(d.colorize for d in durations) * 1000.0,
        mean_total_ms=statistics.fmean(d.total for d in durations) * 1000.0,
        worst_total_ms=max(d.total for d in durations) * 1000.0,
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, float]:
    """Return a JSON-friendly representation of the benchmark summary."""

    return {
        "point_count": summary.point_count,
        "iterations": summary.iterations,
        "mean_simplify_wiggle_ms": summary.mean_simplify_wiggle_ms,
        "mean_simplify_collinear_ms": summary.mean_simplify_collinear_ms,
        "mean_simplify_to_count_ms": summary.mean_simplify_to_count_ms,
        "mean_colorize_ms": summary.mean_colorize_ms,
        "mean_total_ms": summary.mean_total_ms,
        "worst_total_ms": summary.worst_total_ms,
    }


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the benchmark utility."""

    parser = argparse.ArgumentParser(
        description="Benchmark route simplification and terrain coloring",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=20000,
        help="Number of points in the synthetic routes",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of repetitions for averaging",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    args = _parse_args()
    summary = run_benchmark(args.points, args.iterations)
    formatted = _format_summary(summary)
    for key, value in formatted.items():
        if key in {"point_count", "iterations"}:
            print(f"{key}: {value}")
        else:
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
