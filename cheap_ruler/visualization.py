"""Render lines, slices and buffered boxes on an interactive folium map."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import folium  # Using folium to build an interactive Leaflet map.

from .config import MAP_FIT_BOUNDS, MAP_TILES, MAP_ZOOM_START
from .geometry import as_bbox, as_line, as_point, bbox_of
from .models import BBoxLike, LineLike, PointLike

LatLon = Tuple[float, float]
PathLike = Union[str, Path]

_LINE_COLOR = "#2c7bb6"
_HIGHLIGHT_COLOR = "#d73027"
_BBOX_COLOR = "#1a9641"
_MARKER_COLOR = "#fdae61"


def _to_latlon(points: LineLike) -> List[LatLon]:
    """Flip (lon, lat) points into the (lat, lon) order Leaflet expects."""

    return [(point.y, point.x) for point in as_line(points)]


def create_ruler_map(
    line: LineLike,
    *,
    highlight: Optional[LineLike] = None,
    bbox: Optional[BBoxLike] = None,
    markers: Iterable[Tuple[str, PointLike]] = (),
    output_html_path: Optional[PathLike] = None,
) -> folium.Map:
    """Create a map showing ``line`` with optional overlays.

    Args:
        line: Base polyline in (lon, lat) order.
        highlight: Optional sub-line (e.g. a slice) drawn on top of ``line``.
        bbox: Optional bounding box drawn as a rectangle.
        markers: ``(label, point)`` pairs drawn as circle markers.
        output_html_path: Optional path to persist the map as an HTML file.

    Returns:
        A :class:`folium.Map` instance containing the overlays.
    """

    base = _to_latlon(line)
    extent = bbox_of(line)
    center = ((extent.min_y + extent.max_y) / 2, (extent.min_x + extent.max_x) / 2)

    folium_map = folium.Map(
        location=center,
        zoom_start=MAP_ZOOM_START,
        tiles=MAP_TILES,
        control_scale=True,
    )
    if len(base) > 1:
        folium.PolyLine(
            base, color=_LINE_COLOR, weight=4, opacity=0.7, tooltip="Line"
        ).add_to(folium_map)

    if highlight is not None:
        sliced = _to_latlon(highlight)
        if len(sliced) > 1:
            folium.PolyLine(
                sliced,
                color=_HIGHLIGHT_COLOR,
                weight=6,
                opacity=0.9,
                tooltip="Slice",
            ).add_to(folium_map)

    if bbox is not None:
        box = as_bbox(bbox)
        folium.Rectangle(
            bounds=[(box.min_y, box.min_x), (box.max_y, box.max_x)],
            color=_BBOX_COLOR,
            weight=2,
            fill=False,
            tooltip="Bounding box",
        ).add_to(folium_map)

    for label, point in markers:
        p = as_point(point)
        folium.CircleMarker(
            location=(p.y, p.x),
            radius=6,
            color=_MARKER_COLOR,
            fill=True,
            fill_color=_MARKER_COLOR,
            tooltip=label,
        ).add_to(folium_map)

    if MAP_FIT_BOUNDS and len(base) > 1:
        folium_map.fit_bounds(
            [(extent.min_y, extent.min_x), (extent.max_y, extent.max_x)]
        )

    if output_html_path is not None:
        output_path = Path(output_html_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        folium_map.save(str(output_path))

    return folium_map


__all__ = ["create_ruler_map"]
