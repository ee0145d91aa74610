"""Generate an HTML overlay comparing a route with its simplified form."""

from __future__ import annotations

import argparse
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from ..config import PREVIEW_OUTPUT_DIR, PREVIEW_SHOW_ORIGINAL, SIMPLIFY_TARGET_POINTS
from ..errors import WaymarkerError
from ..geometry.polyline import decode as decode_polyline
from ..geometry.simplify import simplify_route
from ..geometry.visualization import create_route_overlay
from ..models import RouteData
from ..routes.gpx import parse_gpx_file
from ..routes.normalizer import normalize
from ..utils import format_distance, format_duration, format_elevation


def load_route(
    *, gpx_path: Optional[Path] = None, encoded: Optional[str] = None
) -> RouteData:
    """Load a route from a GPX file or an encoded polyline string."""

    if gpx_path is not None:
        return parse_gpx_file(gpx_path)
    if encoded:
        return normalize(
            "Polyline route",
            decode_polyline(encoded),
            start_time=None,
            require_points=True,
        )
    raise ValueError("Either a GPX path or an encoded polyline must be provided")


def _slugify(value: str) -> str:
    """Return a filesystem-friendly slug."""

    normalized = value.strip().lower()
    slug = re.sub(r"[^a-z0-9]+", "-", normalized)
    slug = slug.strip("-")
    return slug or "route"


def _default_output_path(route: RouteData) -> Path:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return Path(PREVIEW_OUTPUT_DIR) / f"{_slugify(route.name)}-{stamp}.html"


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser for the route preview tool."""

    parser = argparse.ArgumentParser(
        description=(
            "Simplify a GPX track or encoded polyline and write an interactive"
            " HTML map comparing it with the original."
        )
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--gpx", type=Path, help="Path to a GPX file")
    source.add_argument("--polyline", help="Encoded polyline string")
    reduction = parser.add_mutually_exclusive_group()
    reduction.add_argument(
        "--target-points",
        type=int,
        default=SIMPLIFY_TARGET_POINTS,
        help=f"Approximate point budget (default: {SIMPLIFY_TARGET_POINTS})",
    )
    reduction.add_argument(
        "--tolerance",
        type=float,
        help="Fixed simplification tolerance in degrees (overrides the budget)",
    )
    parser.add_argument(
        "--hide-original",
        action="store_true",
        help="Only draw the simplified route",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help=f"Optional output HTML path; defaults to {PREVIEW_OUTPUT_DIR}/<slug>.html",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``python -m waymarker.tools.preview_route``."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    try:
        route = load_route(gpx_path=args.gpx, encoded=args.polyline)
    except (WaymarkerError, OSError, ValueError) as exc:
        logging.error("Failed to load route: %s", exc)
        return 1

    simplified = simplify_route(
        route, target_count=args.target_points, tolerance=args.tolerance
    )
    stats = route.stats
    logging.info(
        "Route '%s': %s, +%s / -%s, %s",
        route.name,
        format_distance(stats.distance_m),
        format_elevation(stats.elevation_gain_m),
        format_elevation(stats.elevation_loss_m),
        format_duration(stats.duration_s),
    )
    logging.info(
        "Simplified from %s to %s points", len(route.points), len(simplified.points)
    )

    output_path = args.output or _default_output_path(route)
    try:
        create_route_overlay(
            route,
            simplified,
            show_original=PREVIEW_SHOW_ORIGINAL and not args.hide_original,
            output_html_path=output_path,
        )
    except (WaymarkerError, OSError) as exc:
        logging.error("Failed to write preview: %s", exc)
        return 1
    logging.info("Preview written to %s", output_path)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
