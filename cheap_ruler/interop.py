"""Conversions between ruler coordinates and encoded polylines, GeoJSON and shapely."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import sys
from typing import Any, List, Mapping, Union

from polyline import decode as polyline_decode
from polyline import encode as polyline_encode
from shapely.geometry import LineString, MultiPoint, Polygon as ShapelyPolygon, shape
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from .config import POLYLINE_PRECISION
from .errors import GeometryFormatError, InvalidGeometryError
from .geometry import as_line, as_point, as_polygon
from .models import Line, LineLike, Point, Polygon, PolygonLike

PathLike = Union[str, Path]

LOGGER = logging.getLogger(__name__)

@dataclass(frozen=True, slots=True)
class Shape:
    """A decoded geometry: a point sequence, or a polygon when ``kind`` is ``"Polygon"``."""

    kind: str
    coordinates: Union[Line, Polygon]

    @property
    def is_polygon(self) -> bool:
        return self.kind == "Polygon"

    @property
    def line(self) -> Line:
        """Return the coordinates as a line, using the outer ring for polygons."""

        if self.is_polygon:
            return list(self.coordinates[0])  # type: ignore[arg-type]
        return list(self.coordinates)  # type: ignore[arg-type]

    @property
    def polygon(self) -> Polygon:
        """Return the coordinates as a polygon; linear shapes are rejected."""

        if not self.is_polygon:
            raise InvalidGeometryError(f"Expected a Polygon, got {self.kind}")
        return [list(ring) for ring in self.coordinates]  # type: ignore[union-attr]


def decode_polyline(encoded: str, precision: int = POLYLINE_PRECISION) -> Line:
    """Decode an encoded polyline into a list of (lon, lat) points."""

    if not encoded:
        return []
    try:
        decoded = polyline_decode(encoded, precision, geojson=True)
    except (ValueError, TypeError, IndexError) as exc:
        raise GeometryFormatError("Unable to decode polyline") from exc
    return [Point(float(lon), float(lat)) for lon, lat in decoded]


def encode_polyline(line: LineLike, precision: int = POLYLINE_PRECISION) -> str:
    """Encode (lon, lat) points as a polyline string."""

    points = as_line(line)
    return polyline_encode([tuple(point) for point in points], precision, geojson=True)


def from_shapely(geometry: BaseGeometry) -> Shape:
    """Convert a shapely Point, MultiPoint, LineString or Polygon into a :class:`Shape`."""

    kind = geometry.geom_type
    if geometry.is_empty:
        raise InvalidGeometryError(f"Empty {kind} geometry")
    if kind == "Point":
        return Shape(kind, [as_point(geometry.coords[0][:2])])
    if kind == "MultiPoint":
        return Shape(kind, [as_point(part.coords[0][:2]) for part in geometry.geoms])
    if kind == "LineString":
        return Shape(kind, as_line(coord[:2] for coord in geometry.coords))
    if kind == "Polygon":
        # CheapRuler.area subtracts holes only when they wind like the shell.
        outer_ccw = geometry.exterior.is_ccw
        rings = [_open_ring(geometry.exterior.coords)]
        for interior in geometry.interiors:
            ring = _open_ring(interior.coords)
            if interior.is_ccw != outer_ccw:
                ring.reverse()
            rings.append(ring)
        return Shape(kind, as_polygon(rings))
    raise GeometryFormatError(f"Unsupported geometry type: {kind}")


def to_shapely(coordinates: Union[LineLike, PolygonLike], *, polygon: bool = False) -> BaseGeometry:
    """Build a shapely LineString (or Polygon when ``polygon`` is True)."""

    if polygon:
        rings = as_polygon(coordinates)  # type: ignore[arg-type]
        return ShapelyPolygon(rings[0], rings[1:])
    line = as_line(coordinates)  # type: ignore[arg-type]
    if len(line) == 1:
        return MultiPoint(line)
    return LineString(line)


def geometry_from_geojson(payload: Mapping[str, Any]) -> Shape:
    """Decode a GeoJSON geometry, Feature or FeatureCollection (first feature)."""

    if not isinstance(payload, Mapping):
        raise GeometryFormatError("GeoJSON payload must be an object")
    kind = payload.get("type")
    if kind == "FeatureCollection":
        features = payload.get("features") or []
        if not features:
            raise GeometryFormatError("FeatureCollection has no features")
        if len(features) > 1:
            LOGGER.info("Using the first of %d features", len(features))
        return geometry_from_geojson(features[0])
    if kind == "Feature":
        geometry = payload.get("geometry")
        if geometry is None:
            raise GeometryFormatError("Feature has no geometry")
        return geometry_from_geojson(geometry)
    try:
        geometry = shape(payload)
    except (AttributeError, KeyError, TypeError, ValueError, ShapelyError) as exc:
        raise GeometryFormatError(f"Invalid GeoJSON geometry of type {kind!r}") from exc
    return from_shapely(geometry)


def parse_coordinates(payload: Any) -> Shape:
    """Interpret decoded JSON as GeoJSON or as bare coordinate arrays.

    Bare arrays are read by nesting depth: ``[[x, y], ...]`` is a line and
    ``[[[x, y], ...], ...]`` a polygon.
    """

    if isinstance(payload, Mapping):
        return geometry_from_geojson(payload)
    depth = _nesting_depth(payload)
    if depth == 1:
        return Shape("Point", [as_point(payload)])
    if depth == 2:
        return Shape("LineString", as_line(payload))
    if depth == 3:
        return Shape("Polygon", as_polygon(payload))
    raise GeometryFormatError("Unrecognised coordinate payload")


def load_coordinates(path: PathLike) -> Shape:
    """Read a JSON file (``-`` for stdin) holding GeoJSON or bare coordinates."""

    try:
        if str(path) == "-":
            payload = json.load(sys.stdin)
        else:
            with Path(path).open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise GeometryFormatError(f"{path}: invalid JSON ({exc.msg})") from exc
    except UnicodeDecodeError as exc:
        raise GeometryFormatError(f"{path}: not UTF-8 text") from exc
    return parse_coordinates(payload)


def _open_ring(coords: Any) -> List[Point]:
    """Drop the closing vertex shapely repeats at the end of every ring."""

    points = [as_point(coord[:2]) for coord in coords]
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    return points


def _nesting_depth(value: Any) -> int:
    depth = 0
    while isinstance(value, (list, tuple)):
        depth += 1
        if not value:
            break
        value = value[0]
    return depth


__all__ = [
    "Shape",
    "decode_polyline",
    "encode_polyline",
    "from_shapely",
    "to_shapely",
    "geometry_from_geojson",
    "parse_coordinates",
    "load_coordinates",
]
