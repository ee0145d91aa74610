"""Central configuration for the Waymarker route core.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Overrides are read from environment variables
(optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Polyline settings
# ---------------------------------------------------------------------------
# Decimal places encoded in polyline strings (5 for Strava/Google polylines).
POLYLINE_PRECISION = _env_int("WAYMARKER_POLYLINE_PRECISION", 5)


# ---------------------------------------------------------------------------
# Path simplification
# ---------------------------------------------------------------------------
# Point budget used when a route is reduced before mesh generation.
SIMPLIFY_TARGET_POINTS = _env_int("WAYMARKER_SIMPLIFY_TARGET_POINTS", 500)

# Binary search refinements when looking for a tolerance that hits the budget.
SIMPLIFY_MAX_ITERATIONS = _env_int("WAYMARKER_SIMPLIFY_MAX_ITERATIONS", 20)


# ---------------------------------------------------------------------------
# Terrain colorization
# ---------------------------------------------------------------------------
# Base terrain color, also used for clipped vertices and uncolored terrain.
DEFAULT_TERRAIN_COLOR = os.getenv("WAYMARKER_TERRAIN_COLOR", "#8b7355")

# 0 = hard bands, 1 = continuous ramp.
DEFAULT_TERRAIN_SMOOTHNESS = _env_float("WAYMARKER_TERRAIN_SMOOTHNESS", 1.0)


# ---------------------------------------------------------------------------
# Preview tool
# ---------------------------------------------------------------------------
# Directory (absolute or relative) where preview HTML overlays are written.
PREVIEW_OUTPUT_DIR = os.getenv("WAYMARKER_PREVIEW_OUTPUT_DIR", "previews")

# Draw the unsimplified route underneath the simplified one.
PREVIEW_SHOW_ORIGINAL = _env_bool("WAYMARKER_PREVIEW_SHOW_ORIGINAL", True)
