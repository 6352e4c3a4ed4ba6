"""Tests for the vectorised numpy helpers."""

from __future__ import annotations

import numpy as np
import pytest

from cheap_ruler import CheapRuler, InvalidGeometryError
from cheap_ruler.arrays import (
    as_coordinate_array,
    cumulative_distances,
    inside_bbox,
    resample,
    segment_lengths,
)


def test_segment_lengths_match_scalar_distance(ruler: CheapRuler, lines) -> None:
    for line in lines:
        lengths = segment_lengths(ruler, line)
        assert lengths.shape == (len(line) - 1,)
        for value, (a, b) in zip(lengths, zip(line, line[1:])):
            assert value == pytest.approx(ruler.distance(a, b), abs=1e-12)


def test_cumulative_distances_end_at_line_distance(ruler: CheapRuler, lines) -> None:
    for line in lines:
        cumulative = cumulative_distances(ruler, line)
        assert cumulative[0] == 0.0
        assert np.all(np.diff(cumulative) >= 0)
        assert cumulative[-1] == pytest.approx(ruler.line_distance(line), abs=1e-12)


def test_single_point_line_has_no_segments(ruler: CheapRuler) -> None:
    assert segment_lengths(ruler, [[1.0, 2.0]]).shape == (0,)
    assert cumulative_distances(ruler, [[1.0, 2.0]]).tolist() == [0.0]


def test_empty_line_rejected(ruler: CheapRuler) -> None:
    with pytest.raises(InvalidGeometryError):
        segment_lengths(ruler, [])


@pytest.mark.parametrize(
    "points",
    [[[1.0, 2.0, 3.0]], [[1.0, float("nan")]], [[1.0, 2.0], [3.0]]],
)
def test_as_coordinate_array_rejects_malformed_input(points) -> None:
    with pytest.raises(InvalidGeometryError):
        as_coordinate_array(points)


def test_resample_spacing(ruler: CheapRuler, lines) -> None:
    line = lines[3]
    interval = 0.01
    samples = resample(ruler, line, interval)
    assert samples[0].tolist() == pytest.approx(line[0], abs=1e-12)
    assert samples[-1].tolist() == pytest.approx(line[-1], abs=1e-12)
    steps = cumulative_distances(ruler, samples)
    total = ruler.line_distance(line)
    assert len(samples) == int(np.ceil(total / interval)) + 1
    # The line is nearly straight, so samples stay close to evenly spaced.
    assert np.diff(steps)[:-1] == pytest.approx(np.full(len(samples) - 2, interval), rel=1e-3)


def test_resample_points_lie_on_line(ruler: CheapRuler, lines) -> None:
    line = lines[4]
    total = ruler.line_distance(line)
    samples = resample(ruler, line, total / 7)
    for sample in samples:
        snapped = ruler.point_on_line(line, sample)
        assert ruler.distance(snapped.point, sample) == pytest.approx(0.0, abs=1e-9)


def test_resample_caps_point_count(ruler: CheapRuler, lines) -> None:
    samples = resample(ruler, lines[3], 1e-6, max_points=50)
    assert len(samples) <= 50
    assert samples[-1].tolist() == pytest.approx(lines[3][-1], abs=1e-12)


def test_resample_rejects_non_positive_interval(ruler: CheapRuler, lines) -> None:
    with pytest.raises(InvalidGeometryError):
        resample(ruler, lines[0], 0.0)


def test_inside_bbox_mask(ruler: CheapRuler) -> None:
    points = [[35.0, 38.5], [45.0, 45.0], [30.0, 38.0], [40.0, 39.0001]]
    mask = inside_bbox(points, (30, 38, 40, 39))
    assert mask.tolist() == [True, False, True, False]
    for point, flag in zip(points, mask):
        assert ruler.inside_bbox(point, (30, 38, 40, 39)) == bool(flag)
