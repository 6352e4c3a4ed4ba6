"""Tests for the folium map renderer."""

from __future__ import annotations

from pathlib import Path

import folium
import pytest

from cheap_ruler import CheapRuler
from cheap_ruler.visualization import create_ruler_map


@pytest.mark.filterwarnings("ignore::DeprecationWarning")
def test_create_ruler_map_with_overlays(tmp_path: Path, ruler: CheapRuler, lines) -> None:
    line = lines[4]
    dist = ruler.line_distance(line)
    sliced = ruler.line_slice_along(dist * 0.25, dist * 0.75, line)
    box = ruler.buffer_bbox((line[0][0], line[0][1], line[-1][0], line[-1][1]), 0.05)
    output = tmp_path / "maps" / "ruler.html"

    folium_map = create_ruler_map(
        line,
        highlight=sliced,
        bbox=box,
        markers=[("Midpoint", ruler.along(line, dist / 2))],
        output_html_path=output,
    )

    assert isinstance(folium_map, folium.Map)
    assert output.exists()
    html = output.read_text(encoding="utf-8")
    assert "Slice" in html
    assert "Midpoint" in html


@pytest.mark.filterwarnings("ignore::DeprecationWarning")
def test_create_ruler_map_single_point() -> None:
    folium_map = create_ruler_map([[10.0, 50.0]], markers=[("Origin", (10.0, 50.0))])
    assert isinstance(folium_map, folium.Map)
    assert folium_map.location == [50.0, 10.0]
