"""Central error types raised by the ruler and its helpers."""

from __future__ import annotations


class CheapRulerError(ValueError):
    """Base error for invalid arguments passed to the ruler."""


class InvalidGeometryError(CheapRulerError):
    """Raised when a coordinate, line, ring or bounding box is malformed or too short."""


class InvalidLatitudeError(CheapRulerError):
    """Raised when a reference latitude is not finite or lies outside [-90, 90]."""


class InvalidTileError(CheapRulerError):
    """Raised when a tile row or zoom level is out of range."""


class UnknownUnitError(CheapRulerError):
    """Raised when a unit name does not match any supported unit."""


class GeometryFormatError(CheapRulerError):
    """Raised when an encoded polyline or GeoJSON payload cannot be decoded."""


__all__ = [
    "CheapRulerError",
    "InvalidGeometryError",
    "InvalidLatitudeError",
    "InvalidTileError",
    "UnknownUnitError",
    "GeometryFormatError",
]
