"""Planar approximations of distances and line measurements near a reference latitude.

A :class:`CheapRuler` precomputes how many distance units one degree of
longitude (``kx``) and latitude (``ky``) span at its reference latitude, using
polynomial fits to the WGS84 ellipsoid. Every measurement afterwards is plain
arithmetic on scaled degree offsets, which is much cheaper than haversine or
Vincenty formulas and accurate to well under 0.1% for distances up to a few
hundred kilometers away from the poles.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import List

from .errors import InvalidLatitudeError, InvalidTileError
from .geometry import as_bbox, as_line, as_point, as_polygon, equals, interpolate
from .models import (
    BBox,
    BBoxLike,
    Line,
    LineLike,
    Point,
    PointLike,
    PointOnLine,
    PolygonLike,
)
from .units import Unit, UnitLike

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheapRuler:
    """Immutable ruler holding degree-to-distance multipliers for one latitude.

    Build instances with :meth:`from_latitude` or :meth:`from_tile` rather
    than passing scale factors directly.
    """

    kx: float
    ky: float
    units: Unit = Unit.KILOMETERS
    latitude: float | None = None

    @classmethod
    def from_latitude(
        cls, lat: float, units: UnitLike = Unit.KILOMETERS
    ) -> "CheapRuler":
        """Create a ruler for measurements around latitude ``lat`` (degrees).

        Args:
            lat: Reference latitude in degrees, within [-90, 90].
            units: Output distance unit, as a :class:`Unit` or unit name.

        Raises:
            InvalidLatitudeError: If ``lat`` is not finite or out of range.
            UnknownUnitError: If ``units`` is not a recognised unit name.
        """

        unit = Unit.parse(units)
        try:
            lat = float(lat)
        except (TypeError, ValueError) as exc:
            raise InvalidLatitudeError(f"Latitude must be a number: {lat!r}") from exc
        if not math.isfinite(lat) or not -90.0 <= lat <= 90.0:
            raise InvalidLatitudeError(f"Latitude must be within [-90, 90]: {lat!r}")

        m = unit.factor
        cos1 = math.cos(lat * math.pi / 180)
        # Multiple-angle cosines via Chebyshev recurrence.
        cos2 = 2 * cos1 * cos1 - 1
        cos3 = 2 * cos1 * cos2 - cos1
        cos4 = 2 * cos1 * cos3 - cos2
        cos5 = 2 * cos1 * cos4 - cos3

        kx = m * (111.41513 * cos1 - 0.09455 * cos3 + 0.00012 * cos5)
        ky = m * (111.13209 - 0.56605 * cos2 + 0.0012 * cos4)
        LOGGER.debug(
            "Ruler at lat=%.6f units=%s kx=%.9f ky=%.9f", lat, unit.name, kx, ky
        )
        return cls(kx=kx, ky=ky, units=unit, latitude=lat)

    @classmethod
    def from_tile(
        cls, y: float, z: float, units: UnitLike = Unit.KILOMETERS
    ) -> "CheapRuler":
        """Create a ruler for the centre latitude of Web Mercator tile row ``y`` at zoom ``z``."""

        try:
            y = float(y)
            z = float(z)
        except (TypeError, ValueError) as exc:
            raise InvalidTileError(f"Tile coordinates must be numbers: y={y!r} z={z!r}") from exc
        if not (math.isfinite(y) and math.isfinite(z)) or z < 0:
            raise InvalidTileError(f"Zoom must be a non-negative number: {z!r}")
        try:
            rows = 2**z
        except OverflowError as exc:
            raise InvalidTileError(f"Zoom {z:g} is too large") from exc
        if not 0 <= y < rows:
            raise InvalidTileError(f"Tile row {y!r} outside [0, {rows:g}) at zoom {z:g}")
        n = math.pi * (1 - 2 * (y + 0.5) / rows)
        lat = math.atan(math.sinh(n)) * 180 / math.pi
        return cls.from_latitude(lat, units)

    # ------------------------------------------------------------------
    # Point operations
    # ------------------------------------------------------------------
    def distance(self, a: PointLike, b: PointLike) -> float:
        """Return the distance between two points."""

        dx = (a[0] - b[0]) * self.kx
        dy = (a[1] - b[1]) * self.ky
        return math.sqrt(dx * dx + dy * dy)

    def bearing(self, a: PointLike, b: PointLike) -> float:
        """Return the bearing from ``a`` to ``b`` in degrees clockwise from north.

        The result lies in (-180, 180]; coincident points yield 0.
        """

        dx = (b[0] - a[0]) * self.kx
        dy = (b[1] - a[1]) * self.ky
        if dx == 0 and dy == 0:
            return 0.0
        bearing = math.atan2(-dy, dx) * 180 / math.pi + 90
        if bearing > 180:
            bearing -= 360
        return bearing

    def destination(self, p: PointLike, dist: float, bearing: float) -> Point:
        """Return the point ``dist`` away from ``p`` along ``bearing`` (degrees)."""

        a = (90 - bearing) * math.pi / 180
        return Point(
            p[0] + math.cos(a) * dist / self.kx,
            p[1] + math.sin(a) * dist / self.ky,
        )

    def buffer_point(self, p: PointLike, buffer: float) -> BBox:
        """Return the box extending ``buffer`` distance from ``p`` on each axis."""

        v = buffer / self.ky
        h = buffer / self.kx
        return BBox(p[0] - h, p[1] - v, p[0] + h, p[1] + v)

    def buffer_bbox(self, bbox: BBoxLike, buffer: float) -> BBox:
        """Grow ``bbox`` outward by ``buffer`` distance on every side."""

        box = as_bbox(bbox)
        v = buffer / self.ky
        h = buffer / self.kx
        return BBox(box.min_x - h, box.min_y - v, box.max_x + h, box.max_y + v)

    @staticmethod
    def inside_bbox(p: PointLike, bbox: BBoxLike) -> bool:
        """Return True when ``p`` lies inside ``bbox``, boundary included."""

        box = as_bbox(bbox)
        return (
            box.min_x <= p[0] <= box.max_x
            and box.min_y <= p[1] <= box.max_y
        )

    # ------------------------------------------------------------------
    # Line operations
    # ------------------------------------------------------------------
    def line_distance(self, points: LineLike) -> float:
        """Return the total length of a polyline (0 for a single point)."""

        line = as_line(points)
        total = 0.0
        for p0, p1 in zip(line, line[1:]):
            total += self.distance(p0, p1)
        return total

    def along(self, line: LineLike, dist: float) -> Point:
        """Return the point ``dist`` along ``line``, clamped to its end points."""

        coords = as_line(line)
        if dist <= 0:
            return coords[0]

        total = 0.0
        for p0, p1 in zip(coords, coords[1:]):
            d = self.distance(p0, p1)
            total += d
            if total > dist:
                return interpolate(p0, p1, (dist - (total - d)) / d)
        return coords[-1]

    def point_on_line(self, line: LineLike, p: PointLike) -> PointOnLine:
        """Return the closest point on ``line`` to ``p``.

        The result carries the index of the segment start vertex and the
        position ``t`` in [0, 1] along that segment. When two segments are
        equally close the earlier one wins. A query point that is not two
        finite numbers raises :class:`InvalidGeometryError`.
        """

        coords = as_line(line, min_points=2)
        p = as_point(p)
        kx, ky = self.kx, self.ky
        min_dist = math.inf
        min_x = min_y = min_t = 0.0
        min_i = 0

        for i in range(len(coords) - 1):
            t = 0.0
            x, y = coords[i]
            dx = (coords[i + 1][0] - x) * kx
            dy = (coords[i + 1][1] - y) * ky

            if dx != 0 or dy != 0:
                t = ((p[0] - x) * kx * dx + (p[1] - y) * ky * dy) / (dx * dx + dy * dy)
                if t > 1:
                    x, y = coords[i + 1]
                    t = 1.0
                elif t > 0:
                    x += (dx / kx) * t
                    y += (dy / ky) * t
                else:
                    t = 0.0

            dx = (p[0] - x) * kx
            dy = (p[1] - y) * ky
            sq_dist = dx * dx + dy * dy
            if sq_dist < min_dist:
                min_dist = sq_dist
                min_x, min_y = x, y
                min_i = i
                min_t = t

        return PointOnLine(point=Point(min_x, min_y), index=min_i, t=min_t)

    def line_slice(self, start: PointLike, stop: PointLike, line: LineLike) -> Line:
        """Return the part of ``line`` between the points closest to ``start`` and ``stop``.

        The slice always follows the direction of ``line``; passing the end
        points in reverse order yields the same result.
        """

        coords = as_line(line, min_points=2)
        p1 = self.point_on_line(coords, start)
        p2 = self.point_on_line(coords, stop)

        if p1.index > p2.index or (p1.index == p2.index and p1.t > p2.t):
            p1, p2 = p2, p1

        slice_: List[Point] = [p1.point]
        left = p1.index + 1
        right = p2.index

        if not equals(coords[left], slice_[0]) and left <= right:
            slice_.append(coords[left])
        slice_.extend(coords[left + 1 : right + 1])
        if not equals(coords[right], p2.point):
            slice_.append(p2.point)
        return slice_

    def line_slice_along(self, start: float, stop: float, line: LineLike) -> Line:
        """Return the part of ``line`` between distances ``start`` and ``stop`` along it."""

        coords = as_line(line, min_points=2)
        if start > stop:
            start, stop = stop, start

        total = 0.0
        slice_: List[Point] = []
        for p0, p1 in zip(coords, coords[1:]):
            d = self.distance(p0, p1)
            total += d

            if total > start and not slice_:
                slice_.append(interpolate(p0, p1, _fraction(start - (total - d), d)))
            if total >= stop:
                slice_.append(interpolate(p0, p1, _fraction(stop - (total - d), d)))
                return slice_
            if total > start:
                slice_.append(p1)
        return slice_

    def area(self, polygon: PolygonLike) -> float:
        """Return the area of a polygon; rings after the first are holes."""

        rings = as_polygon(polygon)
        total = 0.0
        for i, ring in enumerate(rings):
            sign = -1 if i else 1
            k = len(ring) - 1
            for j in range(len(ring)):
                pj = ring[j]
                pk = ring[k]
                total += (pj[0] - pk[0]) * (pj[1] + pk[1]) * sign
                k = j
        return (abs(total) / 2) * self.kx * self.ky


def _fraction(offset: float, length: float) -> float:
    if length == 0:
        return 0.0
    return offset / length


__all__ = ["CheapRuler"]
