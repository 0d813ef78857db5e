"""Length units.

The planners work in a single internal length unit, the decimal foot
(the unit BIM hosts store geometry in). Display values are converted
once, before planning.
"""

from __future__ import annotations

from enum import Enum


class LengthUnit(str, Enum):
    """Display units accepted on input."""

    MILLIMETERS = "mm"
    METERS = "m"
    FEET = "ft"


# Length of one display unit in feet
_FEET_PER_UNIT = {
    LengthUnit.MILLIMETERS: 1.0 / 304.8,
    LengthUnit.METERS: 1000.0 / 304.8,
    LengthUnit.FEET: 1.0,
}


def to_internal(value: float, unit: LengthUnit | str = LengthUnit.MILLIMETERS) -> float:
    """Convert a display length to internal units (feet)."""
    return value * _FEET_PER_UNIT[LengthUnit(unit)]


def from_internal(value: float, unit: LengthUnit | str = LengthUnit.MILLIMETERS) -> float:
    """Convert an internal length (feet) back to a display unit."""
    return value / _FEET_PER_UNIT[LengthUnit(unit)]
