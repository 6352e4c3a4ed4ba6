"""Distance units supported by the ruler, expressed relative to kilometers."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from .errors import UnknownUnitError


class Unit(Enum):
    """Closed set of distance units; each value is the multiplier from kilometers."""

    KILOMETERS = 1.0
    MILES = 0.62137119223733395
    NAUTICAL_MILES = 0.5399568034557235
    METERS = 1000.0
    YARDS = 1093.6132983377079
    FEET = 3280.8398950131232
    INCHES = 39370.078740157485

    @property
    def factor(self) -> float:
        """Return the multiplier converting kilometers into this unit."""

        return float(self.value)

    @property
    def area_factor(self) -> float:
        """Return the multiplier converting square kilometers into square units."""

        return self.factor * self.factor

    def convert(self, value: float, target: "Unit") -> float:
        """Convert ``value`` expressed in this unit into ``target`` units."""

        return value / self.factor * target.factor

    @classmethod
    def parse(cls, value: "UnitLike") -> "Unit":
        """Resolve a :class:`Unit` from an enum member, member name or alias.

        Matching ignores case, spaces, hyphens and underscores so ``"Nautical
        Miles"``, ``"nautical_miles"`` and ``"nauticalmiles"`` all resolve to
        :attr:`NAUTICAL_MILES`.
        """

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownUnitError(f"Unsupported unit value: {value!r}")
        key = _normalise_name(value)
        try:
            return _UNIT_ALIASES[key]
        except KeyError:
            raise UnknownUnitError(f"Unknown unit: {value!r}") from None


UnitLike = Union[Unit, str]


def _normalise_name(name: str) -> str:
    return "".join(ch for ch in name.strip().lower() if ch not in " -_")


_UNIT_ALIASES: Dict[str, Unit] = {
    "kilometers": Unit.KILOMETERS,
    "kilometres": Unit.KILOMETERS,
    "kilometer": Unit.KILOMETERS,
    "kilometre": Unit.KILOMETERS,
    "km": Unit.KILOMETERS,
    "miles": Unit.MILES,
    "mile": Unit.MILES,
    "mi": Unit.MILES,
    "nauticalmiles": Unit.NAUTICAL_MILES,
    "nauticalmile": Unit.NAUTICAL_MILES,
    "nmi": Unit.NAUTICAL_MILES,
    "nm": Unit.NAUTICAL_MILES,
    "meters": Unit.METERS,
    "metres": Unit.METERS,
    "meter": Unit.METERS,
    "metre": Unit.METERS,
    "m": Unit.METERS,
    "yards": Unit.YARDS,
    "yard": Unit.YARDS,
    "yd": Unit.YARDS,
    "feet": Unit.FEET,
    "foot": Unit.FEET,
    "ft": Unit.FEET,
    "inches": Unit.INCHES,
    "inch": Unit.INCHES,
    "in": Unit.INCHES,
}


__all__ = ["Unit", "UnitLike"]
