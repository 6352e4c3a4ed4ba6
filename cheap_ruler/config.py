"""Central configuration for the cheap ruler toolkit.

All values are constants imported by the rest of the package. Each one can be
overridden through a ``CHEAP_RULER_``-prefixed environment variable (optionally
via a local `.env`). The ruler itself never reads configuration; these values
only feed the command line, the interop helpers and the map renderer.
"""

from __future__ import annotations

import importlib
import os
from typing import Callable, Optional, TypeVar

ENV_PREFIX = "CHEAP_RULER_"

_T = TypeVar("_T")


def _env_raw(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_str(name: str, default: str) -> str:
    value = _env_raw(name)
    return default if value is None else value


def _env_number(name: str, default: _T, cast: Callable[[str], _T]) -> _T:
    """Parse ``CHEAP_RULER_<name>`` with ``cast``, keeping ``default`` when unusable."""

    value = _env_raw(name)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    return _env_number(name, default, float)


def _env_int(name: str, default: int) -> int:
    return _env_number(name, default, int)


def _env_bool(name: str, default: bool) -> bool:
    value = _env_raw(name)
    if value is None:
        return default
    normalized = value.lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _load_env_file() -> bool:
    """Load a `.env` from the working directory or a parent when python-dotenv is installed."""

    try:
        dotenv = importlib.import_module("dotenv")
    except ImportError:
        return False
    return bool(dotenv.load_dotenv())


_load_env_file()


# ---------------------------------------------------------------------------
# Command line defaults
# ---------------------------------------------------------------------------
# Unit used by the CLI when --units is omitted. Any name accepted by
# Unit.parse works (e.g. "km", "miles", "nauticalmiles", "meters").
DEFAULT_UNITS = _env_str("DEFAULT_UNITS", "kilometers")

# Log level used by the CLI when --log-level is omitted.
LOG_LEVEL = _env_str("LOG_LEVEL", "WARNING").upper()

# Indent JSON printed by the CLI. Set to 0 for compact single-line output.
JSON_INDENT = _env_int("JSON_INDENT", 2)


# ---------------------------------------------------------------------------
# Interop
# ---------------------------------------------------------------------------
# Decimal precision of encoded polylines (5 for Google, 6 for OSRM).
POLYLINE_PRECISION = _env_int("POLYLINE_PRECISION", 5)

# Safety cap on the number of samples produced by arrays.resample.
RESAMPLE_MAX_POINTS = _env_int("RESAMPLE_MAX_POINTS", 100_000)


# ---------------------------------------------------------------------------
# Accuracy reports
# ---------------------------------------------------------------------------
# Ellipsoid passed to pyproj.Geod when comparing against true geodesics.
GEODESIC_ELLIPSOID = _env_str("GEODESIC_ELLIPSOID", "WGS84")

# Relative error above which accuracy reports log a warning (0.001 = 0.1%).
ACCURACY_WARN_RELATIVE_ERROR = _env_float("ACCURACY_WARN_RELATIVE_ERROR", 0.001)


# ---------------------------------------------------------------------------
# Map rendering
# ---------------------------------------------------------------------------
MAP_ZOOM_START = _env_int("MAP_ZOOM_START", 14)
MAP_TILES = _env_str("MAP_TILES", "OpenStreetMap")

# Fit the rendered map to the drawn geometry instead of a fixed zoom.
MAP_FIT_BOUNDS = _env_bool("MAP_FIT_BOUNDS", True)
