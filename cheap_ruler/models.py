"""Value types describing coordinates, boxes and projection results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Sequence


class Point(NamedTuple):
    """A longitude/latitude pair in degrees (x = longitude, y = latitude)."""

    x: float
    y: float


class BBox(NamedTuple):
    """Axis-aligned bounding box in degrees."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float


@dataclass(frozen=True, slots=True)
class PointOnLine:
    """Closest point on a polyline together with its segment position."""

    point: Point
    index: int
    t: float


# Inputs accept any numeric sequences; outputs use the named types above.
PointLike = Sequence[float]
LineLike = Sequence[PointLike]
PolygonLike = Sequence[LineLike]
BBoxLike = Sequence[float]

Line = List[Point]
Ring = List[Point]
Polygon = List[Ring]


__all__ = [
    "Point",
    "BBox",
    "PointOnLine",
    "PointLike",
    "LineLike",
    "PolygonLike",
    "BBoxLike",
    "Line",
    "Ring",
    "Polygon",
]
