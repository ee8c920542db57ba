"""
Weight total and percentage breakdown for a recipe's ingredient list.

Only weight denominated rows (g, kg) take part; everything else gets a
None percentage. Never raises: bad quantities count as 0.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .formatting import parse_quantity


@dataclass
class AggregationResult:
    total_weight: float = 0
    unit_label: str = ""
    percentages: list[Optional[float]] = field(default_factory=list)
    total_grams: float = 0

    def to_dict(self):
        return {
            "total_weight": self.total_weight,
            "unit_label": self.unit_label,
            "percentages": self.percentages,
            "total_grams": self.total_grams,
        }


def _row_value(row: Any, key: str) -> Any:
    if isinstance(row, dict):
        return row.get(key)
    return getattr(row, key, None)


def normalize_to_grams(quantity: Any, unit: Optional[str]) -> Optional[float]:
    """Grams for a g/kg quantity, None for any other unit."""
    qty = parse_quantity(quantity) or 0
    u = (unit or "").strip().lower()
    if u == "kg":
        return qty * 1000
    if u == "g":
        return qty
    return None


def aggregate_ingredients(rows: Sequence[Any]) -> AggregationResult:
    if not rows:
        return AggregationResult(total_weight=0, unit_label="", percentages=[])

    normalized = [
        normalize_to_grams(_row_value(row, "quantity"), _row_value(row, "unit"))
        for row in rows
    ]
    total_grams = sum(n for n in normalized if n is not None)

    percentages = [
        (n / total_grams) * 100 if n is not None and total_grams > 0 else None
        for n in normalized
    ]

    if total_grams >= 1000:
        return AggregationResult(total_grams / 1000, "kg", percentages, total_grams)
    return AggregationResult(total_grams, "g", percentages, total_grams)


class IngredientAggregator:
    """Recomputes the aggregation when handed a different row sequence."""

    def __init__(self):
        self._rows = None
        self._result: Optional[AggregationResult] = None

    def compute(self, rows: Sequence[Any]) -> AggregationResult:
        if self._result is None or rows is not self._rows:
            self._rows = rows
            self._result = aggregate_ingredients(rows)
        return self._result
