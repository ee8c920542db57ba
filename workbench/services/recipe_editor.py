"""Ingredient editing session for a recipe.

Holds the ingredient rows in their stored form plus the DisplaySettings of
the session. Every change swaps in a new row tuple, so the aggregation is
recomputed exactly when the list changes.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Iterable, Optional

from .display_units import DisplaySettings
from .formatting import format_display_value, format_percentage, format_total_weight, parse_quantity
from .ingredient_aggregation import AggregationResult, IngredientAggregator
from .unit_conversion import DEFAULT_UNIT, can_convert_unit

EDITABLE_FIELDS = {"name", "quantity", "unit", "cas_number", "notes", "allergens", "inventory_id"}


@dataclass
class IngredientRow:
    name: str = ""
    quantity: Any = ""
    unit: str = DEFAULT_UNIT
    inventory_id: Optional[str] = None  # None for manual ingredients
    cas_number: Optional[str] = None
    notes: Optional[str] = None
    allergens: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "IngredientRow":
        return cls(
            name=data.get("name") or "",
            quantity=data.get("quantity", ""),
            unit=data.get("unit") or DEFAULT_UNIT,
            inventory_id=data.get("inventory_id"),
            cas_number=data.get("cas_number"),
            notes=data.get("notes"),
            allergens=list(data.get("allergens") or []),
        )


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


class RecipeEditor:
    def __init__(
        self,
        rows: Iterable[IngredientRow] = (),
        display: Optional[DisplaySettings] = None,
        recipe_id: Optional[str] = None,
    ):
        self.rows: tuple[IngredientRow, ...] = tuple(rows)
        self.display = display or DisplaySettings()
        self.recipe_id = recipe_id
        self._aggregator = IngredientAggregator()

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.rows):
            raise IndexError(f"Ingredient row {index} out of range")

    def _replace_row(self, index: int, row: IngredientRow) -> None:
        rows = list(self.rows)
        rows[index] = row
        self.rows = tuple(rows)

    # --- Row operations ---

    def add_ingredient(
        self,
        name: str = "",
        quantity: Any = "",
        unit: Optional[str] = None,
        cas_number: Optional[str] = None,
        notes: Optional[str] = None,
        inventory_id: Optional[str] = None,
        allergens: Optional[list[str]] = None,
    ) -> int:
        row = IngredientRow(
            name=name,
            quantity=quantity,
            unit=unit or DEFAULT_UNIT,
            inventory_id=inventory_id,
            cas_number=cas_number,
            notes=notes,
            allergens=list(allergens or []),
        )
        self.rows = self.rows + (row,)
        return len(self.rows) - 1

    def add_from_inventory(self, item: Any) -> int:
        """Append an inventory item as a new row with a blank quantity."""
        return self.add_ingredient(
            name=_get(item, "name") or "",
            unit=_get(item, "unit"),
            cas_number=_get(item, "cas_number"),
            inventory_id=_get(item, "id"),
        )

    def remove_ingredient(self, index: int) -> None:
        self._check_index(index)
        self.rows = self.rows[:index] + self.rows[index + 1:]
        self.display.remove_row(index)

    def move_ingredient(self, src: int, dst: int) -> None:
        self._check_index(src)
        self._check_index(dst)
        if src == dst:
            return
        rows = list(self.rows)
        rows.insert(dst, rows.pop(src))
        self.rows = tuple(rows)
        self.display.move_row(src, dst)

    def update_ingredient(self, index: int, **fields) -> None:
        self._check_index(index)
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown ingredient fields: {', '.join(sorted(unknown))}")

        current = self.rows[index]
        # null clears a field; name and allergens clear to their empty values
        if "name" in fields:
            fields["name"] = fields["name"] or ""
        if "allergens" in fields:
            fields["allergens"] = list(fields["allergens"] or [])
        if "unit" in fields:
            fields["unit"] = fields["unit"] or DEFAULT_UNIT
            if fields["unit"] != current.unit:
                # Old override may not even be in the new unit's group
                self.display.clear_override(index)
        self._replace_row(index, replace(current, **fields))

    def set_quantity(self, index: int, native_value: Any) -> None:
        """Store a quantity already expressed in the row's own unit."""
        self._check_index(index)
        self._replace_row(index, replace(self.rows[index], quantity=native_value))

    def set_display_quantity(self, index: int, entered: Any) -> None:
        """Store a quantity typed while the row shows its display unit."""
        self._check_index(index)
        row = self.rows[index]
        self.set_quantity(index, self.display.to_native_quantity(index, entered, row.unit))

    # --- Display units ---

    def toggle_unit(self, index: int) -> None:
        self._check_index(index)
        self.display.toggle_ingredient_unit(index, self.rows[index].unit)

    def restore_original_units(self) -> None:
        self.display.restore_original_units()

    # --- Derived values ---

    @property
    def aggregation(self) -> AggregationResult:
        return self._aggregator.compute(self.rows)

    def display_rows(self) -> list[dict]:
        percentages = self.aggregation.percentages
        view = []
        for i, row in enumerate(self.rows):
            display_quantity = self.display.get_display_value(i, row.quantity, row.unit)
            parsed = parse_quantity(display_quantity)
            view.append({
                "index": i,
                "name": row.name,
                "quantity": row.quantity,
                "unit": row.unit,
                "display_quantity": display_quantity,
                "display_unit": self.display.get_display_unit(i, row.unit),
                "formatted_quantity": format_display_value(display_quantity if parsed is None else parsed),
                "can_convert": can_convert_unit(row.unit),
                "percentage": percentages[i],
                "formatted_percentage": format_percentage(percentages[i]),
                "inventory_id": row.inventory_id,
                "cas_number": row.cas_number,
                "notes": row.notes,
                "allergens": list(row.allergens),
            })
        return view

    def total_weight_label(self) -> str:
        return format_total_weight(self.aggregation)

    def validate(self) -> list[str]:
        problems = []
        for i, row in enumerate(self.rows):
            if not (row.name or "").strip():
                problems.append(f"Ingredient {i + 1}: name is required")
            qty = parse_quantity(row.quantity)
            if qty is not None and qty < 0:
                problems.append(f"Ingredient {i + 1}: quantity cannot be negative")
        return problems

    def to_persisted_rows(self) -> list[dict]:
        """Rows in their stored (quantity, unit) form, without display state."""
        return [
            {
                "name": row.name.strip(),
                "quantity": parse_quantity(row.quantity),
                "unit": row.unit,
                "inventory_id": row.inventory_id,
                "cas_number": row.cas_number,
                "notes": row.notes,
                "allergens": list(row.allergens),
            }
            for row in self.rows
        ]

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {
            "recipe_id": self.recipe_id,
            "rows": [asdict(row) for row in self.rows],
            "display": self.display.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RecipeEditor":
        return cls(
            rows=[IngredientRow.from_dict(r) for r in data.get("rows") or []],
            display=DisplaySettings.from_dict(data.get("display")),
            recipe_id=data.get("recipe_id"),
        )
