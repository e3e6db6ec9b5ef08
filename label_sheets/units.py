"""Length units and the line height table."""

from __future__ import annotations

from enum import StrEnum

from .errors import UnsupportedFontSizeError


class Unit(StrEnum):
    MM = "mm"
    INCH = "in"


# units per meter-equivalent
_UNITS_PER_METER: dict[Unit, float] = {
    Unit.INCH: 39.37008,
    Unit.MM: 1000.0,
}

# point size -> line height in millimeters
LINE_HEIGHTS_MM: dict[int, float] = {
    6: 2.0,
    7: 2.5,
    8: 3.0,
    9: 4.0,
    10: 5.0,
    11: 6.0,
    12: 7.0,
    13: 8.0,
    14: 9.0,
    15: 10.0,
}


def convert(value: float, from_unit: Unit | str, to_unit: Unit | str) -> float:
    """Convert ``value`` between millimeters and inches.

    ``Unit(...)`` rejects anything else with ``ValueError``.
    """

    src = Unit(from_unit)
    dest = Unit(to_unit)
    if src is dest:
        return value
    return value * _UNITS_PER_METER[dest] / _UNITS_PER_METER[src]


def line_height_for(point_size: float, unit: Unit | str = Unit.MM) -> float:
    """Return the line height for ``point_size`` expressed in ``unit``."""

    try:
        whole = int(point_size)
    except (TypeError, ValueError, OverflowError) as exc:
        raise UnsupportedFontSizeError(point_size) from exc
    if isinstance(point_size, bool) or whole != point_size:
        raise UnsupportedFontSizeError(point_size)
    height = LINE_HEIGHTS_MM.get(whole)
    if height is None:
        raise UnsupportedFontSizeError(point_size)
    return convert(height, Unit.MM, unit)
