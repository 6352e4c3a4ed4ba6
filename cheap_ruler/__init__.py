"""Fast approximate measurements on longitude/latitude coordinates."""

from .errors import (
    CheapRulerError,
    GeometryFormatError,
    InvalidGeometryError,
    InvalidLatitudeError,
    InvalidTileError,
    UnknownUnitError,
)
from .geometry import equals, interpolate
from .models import BBox, Point, PointOnLine
from .ruler import CheapRuler
from .units import Unit

__version__ = "1.0.0"

__all__ = [
    "CheapRuler",
    "Unit",
    "Point",
    "BBox",
    "PointOnLine",
    "equals",
    "interpolate",
    "CheapRulerError",
    "GeometryFormatError",
    "InvalidGeometryError",
    "InvalidLatitudeError",
    "InvalidTileError",
    "UnknownUnitError",
]
