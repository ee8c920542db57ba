"""
Unit Conversion Service for the recipe editor.

Factor based conversions between units of the same group (weight, volume).
Units outside every group (pieces, spoons) are never convertible.
"""

from enum import Enum
from typing import Any, NamedTuple, Optional

# --- Types ---

class UnitGroup(str, Enum):
    WEIGHT = "weight"
    VOLUME = "volume"


class UnitGroupMatch(NamedTuple):
    group: UnitGroup
    units: list[str]


class ConversionError:
    """Recoverable conversion failure, returned instead of raised."""

    def __init__(self, code: str, message: str):
        self.code = code  # unknown_unit | cross_group
        self.message = message

    def to_dict(self):
        return {"code": self.code, "message": self.message}


class ConversionResult:
    def __init__(
        self,
        value: Any,
        unit: Optional[str],
        error: Optional[ConversionError] = None,
    ):
        self.value = value
        self.unit = unit
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self):
        return {
            "value": self.value,
            "unit": self.unit,
            "ok": self.ok,
            "error": self.error.to_dict() if self.error else None,
        }

# --- Data Tables ---

# Group -> ordered member units. Order drives the display toggle cycle.
UNIT_GROUPS: dict[UnitGroup, list[str]] = {
    UnitGroup.WEIGHT: ["g", "kg"],
    UnitGroup.VOLUME: ["ml", "l"],
}

# Unit -> factor to the group base unit (g for weight, ml for volume)
UNIT_CONVERSION_FACTORS: dict[str, float] = {
    "g": 1,
    "kg": 1000,
    "ml": 1,
    "l": 1000,
}

# Units offered by the recipe editor. "szt." (pieces) and the spoons
# deliberately belong to no group.
RECIPE_UNITS = ["g", "kg", "ml", "l", "szt.", "łyżka", "łyżeczka"]

DEFAULT_UNIT = "g"

# --- Core Functions ---

def get_unit_group(unit: Optional[str]) -> Optional[UnitGroupMatch]:
    """Find the group containing `unit`, or None if it is in no group."""
    if not unit:
        return None
    for group, units in UNIT_GROUPS.items():
        if unit in units:
            return UnitGroupMatch(group, units)
    return None


def can_convert_unit(unit: Optional[str]) -> bool:
    return get_unit_group(unit) is not None


def get_factor(unit: str) -> float:
    # Unknown units fall back to 1
    return UNIT_CONVERSION_FACTORS.get(unit, 1)


def convert_value(value, from_unit: Optional[str], to_unit: Optional[str]):
    """
    Convert `value` from one unit to another through the group base unit.

    Missing value/units or identical units return `value` untouched. Units
    from different groups are not rejected here; callers check
    `can_convert_unit` first (see `convert_value_checked` for the strict
    variant).
    """
    if not value or not from_unit or not to_unit or from_unit == to_unit:
        return value

    base = value * get_factor(from_unit)
    return base / get_factor(to_unit)


def convert_value_checked(value, from_unit: Optional[str], to_unit: Optional[str]) -> ConversionResult:
    """Like `convert_value`, but reports unknown or cross-group units as an error result."""
    if not value or not from_unit or not to_unit or from_unit == to_unit:
        return ConversionResult(value, to_unit or from_unit)

    group_from = get_unit_group(from_unit)
    group_to = get_unit_group(to_unit)

    if group_from is None or group_to is None:
        missing = from_unit if group_from is None else to_unit
        return ConversionResult(
            value,
            from_unit,
            ConversionError("unknown_unit", f"Unit '{missing}' is not convertible"),
        )

    if group_from.group != group_to.group:
        return ConversionResult(
            value,
            from_unit,
            ConversionError(
                "cross_group",
                f"Cannot convert {group_from.group.value} ({from_unit}) to {group_to.group.value} ({to_unit})",
            ),
        )

    return ConversionResult(convert_value(value, from_unit, to_unit), to_unit)


def next_unit_in_group(unit: Optional[str]) -> Optional[str]:
    """Next unit in the group's fixed order, wrapping after the last one."""
    match = get_unit_group(unit)
    if match is None:
        return None
    units = match.units
    current_index = units.index(unit)
    return units[(current_index + 1) % len(units)]
