import pytest

from workbench.services.ingredient_aggregation import (
    AggregationResult,
    IngredientAggregator,
    aggregate_ingredients,
    normalize_to_grams,
)


def test_weight_only_selection():
    rows = [
        {"quantity": 500, "unit": "g"},
        {"quantity": 1, "unit": "kg"},
        {"quantity": 3, "unit": "szt."},
    ]
    result = aggregate_ingredients(rows)

    assert result.total_grams == 1500
    assert result.unit_label == "kg"
    assert result.total_weight == 1.5
    assert result.percentages[0] == pytest.approx(33.3333, rel=1e-4)
    assert result.percentages[1] == pytest.approx(66.6667, rel=1e-4)
    assert result.percentages[2] is None


def test_empty_list():
    result = aggregate_ingredients([])
    assert result == AggregationResult(total_weight=0, unit_label="", percentages=[])
    assert result.to_dict() == {"total_weight": 0, "unit_label": "", "percentages": [], "total_grams": 0}


def test_all_non_weight_rows():
    result = aggregate_ingredients([
        {"quantity": 3, "unit": "szt."},
        {"quantity": 2, "unit": "szt."},
    ])
    assert result.total_grams == 0
    assert result.total_weight == 0
    assert result.unit_label == "g"
    # None, not 0: the total_grams > 0 guard short-circuits
    assert result.percentages == [None, None]


def test_blank_quantity_weight_row_counts_as_zero():
    result = aggregate_ingredients([
        {"quantity": "", "unit": "kg"},
        {"quantity": 200, "unit": "g"},
    ])
    assert result.total_grams == 200
    assert result.percentages == [0, 100]
    assert result.unit_label == "g"


def test_volume_rows_are_excluded():
    result = aggregate_ingredients([
        {"quantity": 100, "unit": "g"},
        {"quantity": 5, "unit": "ml"},
        {"quantity": 1, "unit": "l"},
    ])
    assert result.total_grams == 100
    assert result.percentages == [100, None, None]


def test_units_are_trimmed_and_case_insensitive():
    assert normalize_to_grams(2, " KG ") == 2000
    assert normalize_to_grams("3", "G") == 3
    assert normalize_to_grams(3, "ml") is None
    assert normalize_to_grams(3, None) is None
    assert normalize_to_grams("abc", "kg") == 0


def test_threshold_is_inclusive():
    result = aggregate_ingredients([{"quantity": 1000, "unit": "g"}])
    assert result.unit_label == "kg"
    assert result.total_weight == 1

    result = aggregate_ingredients([{"quantity": 999.9, "unit": "g"}])
    assert result.unit_label == "g"
    assert result.total_weight == 999.9


def test_accepts_objects_with_attributes():
    class Row:
        def __init__(self, quantity, unit):
            self.quantity = quantity
            self.unit = unit

    result = aggregate_ingredients([Row("0.25", "kg"), Row(750, "g")])
    assert result.total_weight == 1
    assert result.percentages == [25, 75]


def test_aggregator_recomputes_only_for_a_new_sequence():
    aggregator = IngredientAggregator()
    rows = ({"quantity": 100, "unit": "g"},)

    first = aggregator.compute(rows)
    assert aggregator.compute(rows) is first

    changed = rows + ({"quantity": 100, "unit": "g"},)
    second = aggregator.compute(changed)
    assert second is not first
    assert second.percentages == [50, 50]
