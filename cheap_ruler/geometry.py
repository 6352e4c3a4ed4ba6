"""Coordinate helpers shared by the ruler: equality, interpolation and input coercion."""

from __future__ import annotations

import math
from typing import List

from .errors import InvalidGeometryError
from .models import BBox, BBoxLike, Line, LineLike, Point, PointLike, Polygon, PolygonLike


def equals(a: PointLike, b: PointLike) -> bool:
    """Return True when both coordinates are exactly equal."""

    return a[0] == b[0] and a[1] == b[1]


def interpolate(a: PointLike, b: PointLike, t: float) -> Point:
    """Linearly interpolate between ``a`` and ``b`` in degree space."""

    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return Point(a[0] + dx * t, a[1] + dy * t)


def as_point(value: PointLike) -> Point:
    """Coerce a two-element numeric sequence into a :class:`Point`."""

    if isinstance(value, Point):
        return value
    try:
        x, y = (float(item) for item in value)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometryError(f"Invalid coordinate: {value!r}") from exc
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidGeometryError(f"Coordinate must be finite: {value!r}")
    return Point(x, y)


def as_line(points: LineLike, *, min_points: int = 1, name: str = "line") -> Line:
    """Coerce a sequence of coordinates into a list of points.

    Raises:
        InvalidGeometryError: If fewer than ``min_points`` coordinates are given
            or any coordinate is malformed.
    """

    try:
        line = [as_point(point) for point in points]
    except TypeError as exc:
        raise InvalidGeometryError(f"{name} must be a sequence of coordinates") from exc
    if len(line) < min_points:
        raise InvalidGeometryError(
            f"{name} needs at least {min_points} point(s), got {len(line)}"
        )
    return line


def as_polygon(rings: PolygonLike) -> Polygon:
    """Coerce a sequence of rings; every ring needs at least three points."""

    try:
        polygon: List[Line] = [
            as_line(ring, min_points=3, name=f"ring {idx}")
            for idx, ring in enumerate(rings)
        ]
    except TypeError as exc:
        raise InvalidGeometryError("polygon must be a sequence of rings") from exc
    if not polygon:
        raise InvalidGeometryError("polygon needs at least one ring")
    return polygon


def as_bbox(value: BBoxLike) -> BBox:
    """Coerce a four-element numeric sequence into a :class:`BBox`."""

    if isinstance(value, BBox):
        return value
    try:
        min_x, min_y, max_x, max_y = (float(item) for item in value)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometryError(f"Invalid bounding box: {value!r}") from exc
    return BBox(min_x, min_y, max_x, max_y)


def bbox_of(points: LineLike) -> BBox:
    """Return the bounding box enclosing every coordinate in ``points``."""

    line = as_line(points)
    xs = [point.x for point in line]
    ys = [point.y for point in line]
    return BBox(min(xs), min(ys), max(xs), max(ys))


__all__ = [
    "equals",
    "interpolate",
    "as_point",
    "as_line",
    "as_polygon",
    "as_bbox",
    "bbox_of",
]
