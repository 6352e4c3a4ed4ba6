"""Vectorised numpy counterparts of the ruler's line measurements."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import RESAMPLE_MAX_POINTS
from .errors import InvalidGeometryError
from .geometry import as_bbox
from .models import BBoxLike
from .ruler import CheapRuler

CoordinateArray = NDArray[np.float64]

LOGGER = logging.getLogger(__name__)


def as_coordinate_array(points: Iterable[Sequence[float]]) -> CoordinateArray:
    """Convert an arbitrary iterable of lon/lat pairs into an ``(n, 2)`` float64 array."""

    try:
        array = np.asarray(list(points), dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometryError("Expected a sequence of 2D coordinates") from exc
    if array.size == 0:
        return np.empty((0, 2), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise InvalidGeometryError("Expected a sequence of 2D coordinates")
    if not np.isfinite(array).all():
        raise InvalidGeometryError("Coordinates must be finite")
    return array


def segment_lengths(
    ruler: CheapRuler, points: Iterable[Sequence[float]]
) -> CoordinateArray:
    """Return the length of every segment of a polyline (``n - 1`` values)."""

    array = as_coordinate_array(points)
    if len(array) == 0:
        raise InvalidGeometryError("line needs at least 1 point(s), got 0")
    deltas = np.diff(array, axis=0) * np.array([ruler.kx, ruler.ky])
    return np.sqrt(deltas[:, 0] * deltas[:, 0] + deltas[:, 1] * deltas[:, 1])


def cumulative_distances(
    ruler: CheapRuler, points: Iterable[Sequence[float]]
) -> CoordinateArray:
    """Return the distance from the first vertex to every vertex of a polyline."""

    lengths = segment_lengths(ruler, points)
    return np.concatenate(([0.0], np.cumsum(lengths)))


def resample(
    ruler: CheapRuler,
    points: Iterable[Sequence[float]],
    interval: float,
    *,
    max_points: int = RESAMPLE_MAX_POINTS,
) -> CoordinateArray:
    """Resample a polyline so successive samples are ``interval`` apart along it.

    Samples are interpolated in degree space, like :meth:`CheapRuler.along`,
    and always include both end points. When the requested spacing would
    exceed ``max_points`` samples, ``max_points`` evenly spaced samples are
    returned instead.
    """

    if interval <= 0:
        raise InvalidGeometryError("interval must be greater than zero")
    array = as_coordinate_array(points)
    count = len(array)
    if count == 0:
        raise InvalidGeometryError("line needs at least 1 point(s), got 0")
    if count == 1:
        return array.copy()
    cumulative = cumulative_distances(ruler, array)
    total_length = float(cumulative[-1])
    if total_length == 0:
        return array[:1].copy()

    max_points = max(2, max_points)
    expected = math.ceil(total_length / interval) + 1
    if expected > max_points:
        LOGGER.debug(
            "Resampling to %d evenly spaced points instead of %d", max_points, expected
        )
        target = np.linspace(0.0, total_length, num=max_points)
    else:
        target = _build_target_distances(total_length, interval)
    x = np.interp(target, cumulative, array[:, 0])
    y = np.interp(target, cumulative, array[:, 1])
    return np.column_stack((x, y))


def inside_bbox(points: Iterable[Sequence[float]], bbox: BBoxLike) -> NDArray[np.bool_]:
    """Return a boolean mask of the points lying inside ``bbox`` (inclusive)."""

    array = as_coordinate_array(points)
    box = as_bbox(bbox)
    if len(array) == 0:
        return np.zeros(0, dtype=bool)
    xs = array[:, 0]
    ys = array[:, 1]
    return (xs >= box.min_x) & (xs <= box.max_x) & (ys >= box.min_y) & (ys <= box.max_y)


def _build_target_distances(total_length: float, interval: float) -> CoordinateArray:
    """Return monotonically increasing sample distances that include the end point."""

    distances = [0.0]
    current = interval
    while current < total_length:
        distances.append(current)
        current += interval
    distances.append(total_length)
    return np.asarray(distances, dtype=float)


__all__ = [
    "CoordinateArray",
    "as_coordinate_array",
    "segment_lengths",
    "cumulative_distances",
    "resample",
    "inside_bbox",
]
