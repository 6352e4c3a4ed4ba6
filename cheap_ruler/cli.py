"""Command line access to the ruler.

Examples:
    cheap-ruler distance 30.5 32.8351 30.51 32.8451 --units miles
    cheap-ruler --coords route.geojson measure --compare-geodesic
    cheap-ruler --polyline '_p~iF~ps|U_ulLnnqC' along 100 --map along.html
    cheap-ruler --coords parcel.json --units meters area

Results are printed to stdout as JSON. The reference latitude comes from
``--lat``, ``--tile Y Z``, or the mean latitude of the input.
"""

from __future__ import annotations

import argparse
import json
import logging
import statistics
import sys
from typing import Any, Dict, List, Optional, Sequence

from .accuracy import compare_distance, compare_line_distance
from .config import DEFAULT_UNITS, JSON_INDENT, LOG_LEVEL, POLYLINE_PRECISION
from .errors import CheapRulerError, InvalidGeometryError
from .geometry import bbox_of
from .interop import Shape, decode_polyline, load_coordinates
from .models import Point
from .ruler import CheapRuler
from .units import Unit

LOGGER = logging.getLogger("cheap_ruler.cli")

_GEOMETRY_COMMANDS = {"measure", "along", "slice", "slice-along", "area", "buffer"}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cheap-ruler",
        description="Fast approximate distances and line measurements on lon/lat data",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--coords",
        metavar="FILE",
        help="JSON file with GeoJSON or bare [lon, lat] arrays ('-' reads stdin)",
    )
    source.add_argument("--polyline", help="Encoded polyline string")
    parser.add_argument(
        "--precision",
        type=int,
        default=POLYLINE_PRECISION,
        help=f"Encoded polyline precision (default: {POLYLINE_PRECISION})",
    )
    reference = parser.add_mutually_exclusive_group()
    reference.add_argument("--lat", type=float, help="Reference latitude in degrees")
    reference.add_argument(
        "--tile",
        nargs=2,
        type=float,
        metavar=("Y", "Z"),
        help="Derive the reference latitude from a Web Mercator tile row and zoom",
    )
    parser.add_argument(
        "--units",
        default=DEFAULT_UNITS,
        help=f"Distance unit (default: {DEFAULT_UNITS})",
    )
    parser.add_argument(
        "--map",
        metavar="HTML",
        help="Write an interactive map of the input and result to this path",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging verbosity (default: {LOG_LEVEL})",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    for name, text in (
        ("distance", "Distance between two points"),
        ("bearing", "Bearing from the first point to the second"),
    ):
        cmd = commands.add_parser(name, help=text)
        cmd.add_argument("x1", type=float)
        cmd.add_argument("y1", type=float)
        cmd.add_argument("x2", type=float)
        cmd.add_argument("y2", type=float)
        if name == "distance":
            cmd.add_argument(
                "--compare-geodesic",
                action="store_true",
                help="Also report the WGS84 geodesic distance and the error",
            )

    destination = commands.add_parser(
        "destination", help="Point reached from X Y after DIST along BEARING"
    )
    destination.add_argument("x", type=float)
    destination.add_argument("y", type=float)
    destination.add_argument("dist", type=float)
    destination.add_argument("bearing", type=float)

    measure = commands.add_parser("measure", help="Length and bounding box of the input")
    measure.add_argument(
        "--compare-geodesic",
        action="store_true",
        help="Also report the WGS84 geodesic length and the error",
    )

    along = commands.add_parser("along", help="Point at a distance along the input line")
    along.add_argument("dist", type=float)

    slice_cmd = commands.add_parser(
        "slice", help="Part of the input line between two snapped points"
    )
    slice_cmd.add_argument("--start", nargs=2, type=float, required=True, metavar=("X", "Y"))
    slice_cmd.add_argument("--stop", nargs=2, type=float, required=True, metavar=("X", "Y"))

    slice_along = commands.add_parser(
        "slice-along", help="Part of the input line between two distances along it"
    )
    slice_along.add_argument("start", type=float)
    slice_along.add_argument("stop", type=float)

    commands.add_parser("area", help="Area of the input polygon (holes subtracted)")

    buffer = commands.add_parser(
        "buffer", help="Bounding box of the input grown by a distance"
    )
    buffer.add_argument("dist", type=float)

    args = parser.parse_args(argv)
    if args.command in _GEOMETRY_COMMANDS and not (args.coords or args.polyline):
        parser.error(f"'{args.command}' needs --coords or --polyline input")
    return args


def load_shape(args: argparse.Namespace) -> Optional[Shape]:
    """Load the input geometry named on the command line, if any."""

    if args.coords:
        return load_coordinates(args.coords)
    if args.polyline:
        line = decode_polyline(args.polyline, args.precision)
        if not line:
            raise InvalidGeometryError("Encoded polyline contains no points")
        return Shape("LineString", line)
    return None


def build_ruler(args: argparse.Namespace, latitudes: Sequence[float]) -> CheapRuler:
    """Construct the ruler from --lat, --tile, or the mean input latitude."""

    units = Unit.parse(args.units)
    if args.tile is not None:
        y, z = args.tile
        return CheapRuler.from_tile(y, z, units)
    if args.lat is not None:
        return CheapRuler.from_latitude(args.lat, units)
    if not latitudes:
        raise InvalidGeometryError("No input to derive a reference latitude from")
    lat = statistics.fmean(latitudes)
    LOGGER.info("Using mean input latitude %.6f as reference", lat)
    return CheapRuler.from_latitude(lat, units)


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """Execute the selected command and return its JSON-ready result."""

    command = args.command
    unit_name = Unit.parse(args.units).name.lower()
    result: Dict[str, Any] = {"command": command, "units": unit_name}
    highlight: Optional[List[Point]] = None
    markers: List[tuple[str, Point]] = []

    if command in {"distance", "bearing"}:
        a = Point(args.x1, args.y1)
        b = Point(args.x2, args.y2)
        ruler = build_ruler(args, [a.y, b.y])
        if command == "distance":
            result["distance"] = ruler.distance(a, b)
            if args.compare_geodesic:
                result["geodesic"] = compare_distance(ruler, a, b).as_dict()
        else:
            result["bearing"] = ruler.bearing(a, b)
        line = [a, b]
    elif command == "destination":
        start = Point(args.x, args.y)
        ruler = build_ruler(args, [start.y])
        end = ruler.destination(start, args.dist, args.bearing)
        result["point"] = list(end)
        line = [start, end]
    else:
        shape = load_shape(args)
        if shape is None:
            raise InvalidGeometryError(f"'{command}' needs --coords or --polyline input")
        if command == "area":
            polygon = shape.polygon
            ruler = build_ruler(args, [p.y for ring in polygon for p in ring])
            result["area"] = ruler.area(polygon)
            result["units"] = f"square {unit_name}"
            line = polygon[0] + polygon[0][:1]
        else:
            line = shape.line
            ruler = build_ruler(args, [p.y for p in line])
            if command == "measure":
                result["points"] = len(line)
                result["length"] = ruler.line_distance(line)
                result["bbox"] = list(bbox_of(line))
                if args.compare_geodesic:
                    result["geodesic"] = compare_line_distance(ruler, line).as_dict()
            elif command == "along":
                point = ruler.along(line, args.dist)
                result["point"] = list(point)
                markers.append((f"{args.dist:g} {unit_name}", point))
            elif command == "slice":
                highlight = ruler.line_slice(args.start, args.stop, line)
                result["line"] = [list(p) for p in highlight]
                result["length"] = ruler.line_distance(highlight)
            elif command == "slice-along":
                highlight = ruler.line_slice_along(args.start, args.stop, line)
                result["line"] = [list(p) for p in highlight]
                if highlight:
                    result["length"] = ruler.line_distance(highlight)
            elif command == "buffer":
                if len(line) == 1:
                    box = ruler.buffer_point(line[0], args.dist)
                else:
                    box = ruler.buffer_bbox(bbox_of(line), args.dist)
                result["bbox"] = list(box)

    result["reference_latitude"] = ruler.latitude
    if args.map:
        _write_map(args, line, highlight, result.get("bbox"), markers)
    return result


def _write_map(
    args: argparse.Namespace,
    line: List[Point],
    highlight: Optional[List[Point]],
    bbox: Optional[Sequence[float]],
    markers: List[tuple[str, Point]],
) -> None:
    # folium is heavy to import; only pay for it when a map is requested.
    from .visualization import create_ruler_map

    create_ruler_map(
        line,
        highlight=highlight,
        bbox=bbox,
        markers=markers,
        output_html_path=args.map,
    )
    LOGGER.info("Map written to %s", args.map)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
    try:
        result = run(args)
    except (CheapRulerError, OSError) as exc:
        LOGGER.error("%s", exc)
        raise SystemExit(2) from exc
    json.dump(result, sys.stdout, indent=JSON_INDENT or None)
    sys.stdout.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
