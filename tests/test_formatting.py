import pytest

from workbench.services.formatting import (
    format_display_value,
    format_percentage,
    format_total_weight,
    parse_quantity,
    to_fixed,
)
from workbench.services.ingredient_aggregation import AggregationResult


@pytest.mark.parametrize("value,expected", [
    (2.000, "2"),
    (2, "2"),
    (0, "0"),
    (1.25, "1.25"),
    (1.250, "1.25"),
    (1.23456, "1.235"),
    (0.0005, "0.001"),
    (1500.5, "1500.5"),
    (-0.25, "-0.25"),
    (0.0001, "0"),
])
def test_format_display_value(value, expected):
    assert format_display_value(value) == expected


def test_format_display_value_non_numbers():
    assert format_display_value(None) == ""
    assert format_display_value("") == ""
    assert format_display_value("abc") == "abc"


def test_to_fixed_uses_exact_binary_value():
    # 1.005 is stored as 1.00499999999999989..., so it rounds down like toFixed
    assert to_fixed(1.005, 2) == "1.00"
    assert to_fixed(2.5, 0) == "3"


@pytest.mark.parametrize("raw,expected", [
    (5, 5.0),
    (2.5, 2.5),
    ("2.5", 2.5),
    (" 12 ", 12.0),
    ("12.5 kg", 12.5),
    ("1,5", 1.0),
    (".5", 0.5),
    ("1e3", 1000.0),
    ("", None),
    ("abc", None),
    (None, None),
    (float("nan"), None),
    (True, None),
])
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


def test_format_percentage():
    assert format_percentage(100 / 3) == "33.33%"
    assert format_percentage(0) == "0.00%"
    assert format_percentage(None) == ""


def test_format_total_weight():
    assert format_total_weight(AggregationResult(1.5, "kg", [], 1500)) == "1.5 kg"
    assert format_total_weight(AggregationResult(250, "g", [], 250)) == "250 g"
    assert format_total_weight(AggregationResult()) == ""
