"""Accuracy reports comparing ruler measurements with ellipsoidal geodesics.

These helpers are diagnostics only: they tell a caller how far the planar
approximation drifts from the true WGS84 distance for a given input, which
grows with distance and with the gap between the input and the ruler's
reference latitude.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging

from pyproj import Geod

from .config import ACCURACY_WARN_RELATIVE_ERROR, GEODESIC_ELLIPSOID
from .geometry import as_line, as_point
from .models import LineLike, PointLike
from .ruler import CheapRuler
from .units import Unit

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AccuracyReport:
    """Ruler distance next to the geodesic distance, both in the ruler's units."""

    approximate: float
    geodesic: float
    units: Unit

    @property
    def absolute_error(self) -> float:
        return abs(self.approximate - self.geodesic)

    @property
    def relative_error(self) -> float:
        """Return the error as a fraction of the geodesic distance (0 for zero length)."""

        if self.geodesic == 0:
            return 0.0 if self.approximate == 0 else float("inf")
        return self.absolute_error / self.geodesic

    def as_dict(self) -> dict[str, object]:
        return {
            "units": self.units.name.lower(),
            "approximate": self.approximate,
            "geodesic": self.geodesic,
            "absolute_error": self.absolute_error,
            "relative_error": self.relative_error,
        }


@lru_cache(maxsize=4)
def _geod(ellipsoid: str) -> Geod:
    return Geod(ellps=ellipsoid)


def geodesic_distance(
    a: PointLike,
    b: PointLike,
    units: Unit = Unit.KILOMETERS,
    *,
    ellipsoid: str = GEODESIC_ELLIPSOID,
) -> float:
    """Return the ellipsoidal distance between two points in ``units``."""

    pa = as_point(a)
    pb = as_point(b)
    _, _, meters = _geod(ellipsoid).inv(pa.x, pa.y, pb.x, pb.y)
    return Unit.METERS.convert(float(meters), units)


def geodesic_line_distance(
    points: LineLike,
    units: Unit = Unit.KILOMETERS,
    *,
    ellipsoid: str = GEODESIC_ELLIPSOID,
) -> float:
    """Return the ellipsoidal length of a polyline in ``units``."""

    line = as_line(points)
    if len(line) < 2:
        return 0.0
    lons = [point.x for point in line]
    lats = [point.y for point in line]
    meters = _geod(ellipsoid).line_length(lons, lats)
    return Unit.METERS.convert(float(meters), units)


def compare_distance(ruler: CheapRuler, a: PointLike, b: PointLike) -> AccuracyReport:
    """Compare :meth:`CheapRuler.distance` against the geodesic distance."""

    report = AccuracyReport(
        approximate=ruler.distance(as_point(a), as_point(b)),
        geodesic=geodesic_distance(a, b, ruler.units),
        units=ruler.units,
    )
    _log_report(report)
    return report


def compare_line_distance(ruler: CheapRuler, points: LineLike) -> AccuracyReport:
    """Compare :meth:`CheapRuler.line_distance` against the geodesic length."""

    line = as_line(points)
    report = AccuracyReport(
        approximate=ruler.line_distance(line),
        geodesic=geodesic_line_distance(line, ruler.units),
        units=ruler.units,
    )
    _log_report(report)
    return report


def _log_report(report: AccuracyReport) -> None:
    if report.relative_error > ACCURACY_WARN_RELATIVE_ERROR:
        LOGGER.warning(
            "Planar approximation off by %.4f%% (%.6f vs geodesic %.6f %s)",
            report.relative_error * 100,
            report.approximate,
            report.geodesic,
            report.units.name.lower(),
        )


__all__ = [
    "AccuracyReport",
    "geodesic_distance",
    "geodesic_line_distance",
    "compare_distance",
    "compare_line_distance",
]
