"""Per-row display unit overrides for the recipe editor.

The stored (quantity, unit) pair of an ingredient never changes when the user
flips the shown unit; only this value object does. It is passed explicitly to
the editor and view helpers and is never written to the recipe tables.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .formatting import parse_quantity
from .unit_conversion import can_convert_unit, convert_value, get_unit_group, next_unit_in_group


@dataclass
class DisplaySettings:
    show_display_units: bool = False
    overrides: dict[int, str] = field(default_factory=dict)

    def active_override(self, row_index: int) -> Optional[str]:
        if not self.show_display_units:
            return None
        return self.overrides.get(row_index)

    def toggle_ingredient_unit(self, row_index: int, unit: Optional[str]) -> None:
        """Cycle the shown unit of a row to the next unit of its group.

        Landing back on the stored unit drops the override. Rows whose unit
        is not convertible are left alone.
        """
        if not can_convert_unit(unit):
            return

        current = self.overrides.get(row_index, unit)
        if get_unit_group(current) != get_unit_group(unit):
            current = unit

        next_unit = next_unit_in_group(current)
        if next_unit == unit:
            self.overrides.pop(row_index, None)
        else:
            self.overrides[row_index] = next_unit
        self.show_display_units = True

    def get_display_value(self, row_index: int, quantity: Any, unit: Optional[str]) -> Any:
        display_unit = self.active_override(row_index)
        if display_unit is None or quantity is None or quantity == "":
            return quantity

        parsed = parse_quantity(quantity)
        if parsed is None:
            return quantity
        return convert_value(parsed, unit, display_unit)

    def get_display_unit(self, row_index: int, unit: Optional[str]) -> Optional[str]:
        return self.active_override(row_index) or unit

    def to_native_quantity(self, row_index: int, entered: Any, unit: Optional[str]) -> Any:
        """Convert a value typed in the shown unit back to the stored unit."""
        display_unit = self.active_override(row_index)
        if display_unit is None:
            return entered

        parsed = parse_quantity(entered)
        if parsed is None:
            return entered
        return convert_value(parsed, display_unit, unit)

    def clear_override(self, row_index: int) -> None:
        self.overrides.pop(row_index, None)

    def restore_original_units(self) -> None:
        self.overrides = {}
        self.show_display_units = False

    # --- Row bookkeeping ---

    def remove_row(self, row_index: int) -> None:
        """Drop the override of a removed row and shift the ones after it."""
        self.overrides = {
            (k - 1 if k > row_index else k): v
            for k, v in self.overrides.items()
            if k != row_index
        }

    def move_row(self, src: int, dst: int) -> None:
        """Re-key overrides after a row moved from `src` to `dst` (pop + insert)."""
        def new_index(k: int) -> int:
            if k == src:
                return dst
            if src < dst and src < k <= dst:
                return k - 1
            if dst < src and dst <= k < src:
                return k + 1
            return k

        self.overrides = {new_index(k): v for k, v in self.overrides.items()}

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {
            "show_display_units": self.show_display_units,
            "overrides": {str(k): v for k, v in self.overrides.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DisplaySettings":
        data = data or {}
        return cls(
            show_display_units=bool(data.get("show_display_units", False)),
            overrides={int(k): v for k, v in (data.get("overrides") or {}).items()},
        )
