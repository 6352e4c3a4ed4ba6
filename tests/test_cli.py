"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cheap_ruler import CheapRuler, InvalidGeometryError
from cheap_ruler.cli import main, parse_args, run

REFERENCE_LAT = 32.8351


def _run_main(capsys: pytest.CaptureFixture[str], argv) -> dict:
    main(argv)
    return json.loads(capsys.readouterr().out)


def test_distance_command(capsys: pytest.CaptureFixture[str]) -> None:
    result = _run_main(
        capsys,
        ["--lat", str(REFERENCE_LAT), "distance", "30.5", "32.8351", "30.51", "32.8451"],
    )
    ruler = CheapRuler.from_latitude(REFERENCE_LAT)
    assert result["command"] == "distance"
    assert result["units"] == "kilometers"
    assert result["distance"] == pytest.approx(
        ruler.distance((30.5, 32.8351), (30.51, 32.8451)), rel=1e-12
    )
    assert result["reference_latitude"] == pytest.approx(REFERENCE_LAT)


def test_distance_uses_mean_latitude_and_compares(capsys: pytest.CaptureFixture[str]) -> None:
    result = _run_main(
        capsys,
        ["--units", "mi", "distance", "0", "10", "0", "20", "--compare-geodesic"],
    )
    assert result["units"] == "miles"
    assert result["reference_latitude"] == pytest.approx(15.0)
    assert result["geodesic"]["units"] == "miles"
    assert result["geodesic"]["relative_error"] < 0.01


def test_bearing_command(capsys: pytest.CaptureFixture[str]) -> None:
    result = _run_main(capsys, ["bearing", "0", "0", "1", "0"])
    assert result["bearing"] == pytest.approx(90.0, abs=1e-9)


def test_measure_from_coordinate_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], lines
) -> None:
    path = tmp_path / "line.json"
    path.write_text(json.dumps(lines[1]), encoding="utf-8")
    result = _run_main(
        capsys, ["--coords", str(path), "--lat", str(REFERENCE_LAT), "measure"]
    )
    ruler = CheapRuler.from_latitude(REFERENCE_LAT)
    assert result["points"] == len(lines[1])
    assert result["length"] == pytest.approx(ruler.line_distance(lines[1]), rel=1e-12)
    assert len(result["bbox"]) == 4


def test_along_with_polyline(capsys: pytest.CaptureFixture[str]) -> None:
    result = _run_main(
        capsys, ["--polyline", "_p~iF~ps|U_ulLnnqC_mqNvxq`@", "along", "0"]
    )
    assert result["point"] == pytest.approx([-120.2, 38.5], abs=1e-9)


def test_slice_along_and_map(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], lines
) -> None:
    coords = tmp_path / "line.json"
    coords.write_text(json.dumps(lines[3]), encoding="utf-8")
    html = tmp_path / "slice.html"
    result = _run_main(
        capsys,
        ["--coords", str(coords), "--map", str(html), "slice-along", "0.05", "0.15"],
    )
    assert result["length"] == pytest.approx(0.1, abs=1e-9)
    assert html.exists()


def test_area_of_polygon_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    polygon = {
        "type": "Polygon",
        "coordinates": [[[0, 0], [0.01, 0], [0.01, 0.01], [0, 0.01], [0, 0]]],
    }
    path = tmp_path / "polygon.geojson"
    path.write_text(json.dumps(polygon), encoding="utf-8")
    result = _run_main(capsys, ["--coords", str(path), "--lat", "0", "area"])
    ruler = CheapRuler.from_latitude(0)
    assert result["units"] == "square kilometers"
    assert result["area"] == pytest.approx(1e-4 * ruler.kx * ruler.ky, rel=1e-9)


def test_area_rejects_line_input(tmp_path: Path, lines) -> None:
    path = tmp_path / "line.json"
    path.write_text(json.dumps(lines[0]), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["--coords", str(path), "area"])
    assert excinfo.value.code == 2


def test_geometry_command_requires_input() -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["along", "1"])
    assert excinfo.value.code == 2


def test_invalid_tile_exits_with_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--tile", "5", "2", "distance", "0", "0", "1", "1"])
    assert excinfo.value.code == 2


def test_unknown_units_exit_with_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--units", "furlongs", "bearing", "0", "0", "1", "1"])
    assert excinfo.value.code == 2


def test_missing_file_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--coords", str(tmp_path / "missing.json"), "measure"])
    assert excinfo.value.code == 2


def test_run_returns_buffer_for_single_point(tmp_path: Path) -> None:
    path = tmp_path / "point.json"
    path.write_text(json.dumps([10.0, 50.0]), encoding="utf-8")
    args = parse_args(["--coords", str(path), "--units", "meters", "buffer", "100"])
    result = run(args)
    ruler = CheapRuler.from_latitude(50.0, "meters")
    assert result["bbox"] == pytest.approx(list(ruler.buffer_point((10.0, 50.0), 100)))


def test_undecodable_file_exits_with_error(tmp_path: Path) -> None:
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe[[1,2],[3,4]]")
    with pytest.raises(SystemExit) as excinfo:
        main(["--coords", str(path), "measure"])
    assert excinfo.value.code == 2


def test_point_commands_ignore_coordinate_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing.json"
    result = _run_main(
        capsys, ["--coords", str(missing), "destination", "0", "0", "1", "90"]
    )
    assert result["command"] == "destination"
    assert not missing.exists()


def test_run_without_input_raises_for_geometry_command(tmp_path: Path, lines) -> None:
    path = tmp_path / "line.json"
    path.write_text(json.dumps(lines[0]), encoding="utf-8")
    args = parse_args(["--coords", str(path), "measure"])
    args.coords = None
    with pytest.raises(InvalidGeometryError):
        run(args)
