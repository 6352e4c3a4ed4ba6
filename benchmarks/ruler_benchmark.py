"""Benchmark ruler line measurements against pyproj geodesics."""

from __future__ import annotations

import argparse
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from cheap_ruler import CheapRuler  # noqa: E402
from cheap_ruler.accuracy import geodesic_line_distance  # noqa: E402
from cheap_ruler.arrays import cumulative_distances  # noqa: E402
from cheap_ruler.models import Point  # noqa: E402


@dataclass(slots=True)
class StageDurations:
    """Timing measurements (in seconds) for one benchmark iteration."""

    ruler: float
    vectorised: float
    geodesic: float


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    point_count: int
    iterations: int
    mean_ruler_ms: float
    mean_vectorised_ms: float
    mean_geodesic_ms: float
    relative_error: float


def _build_polyline(point_count: int, base_lat: float) -> List[Point]:
    """Generate a diagonal lon/lat polyline with evenly spaced points."""

    base_lon = -122.0
    step_deg = 1.2e-5
    return [
        Point(base_lon + idx * step_deg, base_lat + idx * step_deg)
        for idx in range(point_count)
    ]


def _run_iteration(ruler: CheapRuler, line: List[Point]) -> StageDurations:
    """Execute one benchmark iteration and capture per-stage timings."""

    start = time.perf_counter()
    ruler.line_distance(line)
    ruler_dur = time.perf_counter() - start

    start = time.perf_counter()
    cumulative_distances(ruler, line)
    vectorised = time.perf_counter() - start

    start = time.perf_counter()
    geodesic_line_distance(line, ruler.units)
    geodesic = time.perf_counter() - start

    return StageDurations(ruler=ruler_dur, vectorised=vectorised, geodesic=geodesic)


def run_benchmark(point_count: int, iterations: int, lat: float) -> BenchmarkSummary:
    """Benchmark the ruler and return aggregated timings."""

    if point_count < 2:
        raise ValueError("point_count must be at least 2")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    line = _build_polyline(point_count, lat)
    ruler = CheapRuler.from_latitude(lat)
    durations = [_run_iteration(ruler, line) for _ in range(iterations)]

    approximate = ruler.line_distance(line)
    geodesic = geodesic_line_distance(line, ruler.units)
    error = abs(approximate - geodesic) / geodesic if geodesic else 0.0

    return BenchmarkSummary(
        point_count=point_count,
        iterations=iterations,
        mean_ruler_ms=statistics.fmean(d.ruler for d in durations) * 1000.0,
        mean_vectorised_ms=statistics.fmean(d.vectorised for d in durations) * 1000.0,
        mean_geodesic_ms=statistics.fmean(d.geodesic for d in durations) * 1000.0,
        relative_error=error,
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, float]:
    """Return a JSON-friendly representation of the benchmark summary."""

    return {
        "point_count": summary.point_count,
        "iterations": summary.iterations,
        "mean_ruler_ms": summary.mean_ruler_ms,
        "mean_vectorised_ms": summary.mean_vectorised_ms,
        "mean_geodesic_ms": summary.mean_geodesic_ms,
        "relative_error": summary.relative_error,
    }


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the benchmark utility."""

    parser = argparse.ArgumentParser(
        description="Benchmark ruler line distances against WGS84 geodesics",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=100000,
        help="Number of points in the synthetic polyline",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of repetitions for averaging",
    )
    parser.add_argument(
        "--lat",
        type=float,
        default=37.0,
        help="Latitude the synthetic polyline starts at",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    args = _parse_args()
    summary = run_benchmark(args.points, args.iterations, args.lat)
    formatted = _format_summary(summary)
    for key, value in formatted.items():
        if key in {"point_count", "iterations"}:
            print(f"{key}: {value}")
        elif key == "relative_error":
            print(f"{key}: {value:.3e}")
        else:
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
