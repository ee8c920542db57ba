"""
Tests for the unit conversion service.
"""

import pytest

from workbench.services.unit_conversion import (
    RECIPE_UNITS,
    UNIT_CONVERSION_FACTORS,
    UNIT_GROUPS,
    UnitGroup,
    can_convert_unit,
    convert_value,
    convert_value_checked,
    get_unit_group,
    next_unit_in_group,
)


def test_every_group_unit_has_a_positive_factor():
    for units in UNIT_GROUPS.values():
        for unit in units:
            assert UNIT_CONVERSION_FACTORS[unit] > 0


def test_get_unit_group():
    match = get_unit_group("kg")
    assert match.group == UnitGroup.WEIGHT
    assert match.units == ["g", "kg"]

    assert get_unit_group("l").group == UnitGroup.VOLUME
    assert get_unit_group("szt.") is None
    assert get_unit_group("") is None
    assert get_unit_group(None) is None


def test_pieces_and_spoons_are_not_convertible():
    assert can_convert_unit("szt.") is False
    assert can_convert_unit("łyżka") is False
    assert can_convert_unit("łyżeczka") is False
    assert can_convert_unit("g") is True
    assert can_convert_unit("ml") is True


@pytest.mark.parametrize("unit", RECIPE_UNITS)
def test_identity_conversion(unit):
    assert convert_value(12.5, unit, unit) == 12.5


def test_simple_conversions():
    assert convert_value(1, "kg", "g") == 1000
    assert convert_value(250, "g", "kg") == 0.25
    assert convert_value(1.5, "l", "ml") == 1500


def test_round_trip_within_group():
    for value in (0.001, 1, 3.3, 1234.5678):
        there = convert_value(value, "g", "kg")
        assert convert_value(there, "kg", "g") == pytest.approx(value)
        there = convert_value(value, "l", "ml")
        assert convert_value(there, "ml", "l") == pytest.approx(value)


def test_falsy_inputs_short_circuit():
    assert convert_value(0, "kg", "g") == 0
    assert convert_value(None, "kg", "g") is None
    assert convert_value("", "kg", "g") == ""
    assert convert_value(5, "", "g") == 5
    assert convert_value(5, "kg", None) == 5


def test_unknown_units_default_factor_of_one():
    # Permissive path: no error, factor falls back to 1
    assert convert_value(5, "szt.", "kg") == 5 / 1000
    assert convert_value(5, "glarps", "zorps") == 5


def test_cross_group_is_not_rejected_by_permissive_convert():
    # kg -> ml silently gives a meaningless number
    assert convert_value(1, "kg", "ml") == 1000


def test_checked_conversion_ok():
    result = convert_value_checked(2, "kg", "g")
    assert result.ok
    assert result.value == 2000
    assert result.unit == "g"


def test_checked_conversion_cross_group():
    result = convert_value_checked(1, "kg", "ml")
    assert not result.ok
    assert result.error.code == "cross_group"
    assert result.value == 1
    assert result.unit == "kg"


def test_checked_conversion_unknown_unit():
    result = convert_value_checked(3, "szt.", "g")
    assert not result.ok
    assert result.error.code == "unknown_unit"
    assert "szt." in result.error.message
    assert result.to_dict()["error"]["code"] == "unknown_unit"


def test_checked_conversion_identity_even_for_unknown_units():
    result = convert_value_checked(3, "szt.", "szt.")
    assert result.ok
    assert result.value == 3


def test_next_unit_wraps():
    assert next_unit_in_group("g") == "kg"
    assert next_unit_in_group("kg") == "g"
    assert next_unit_in_group("ml") == "l"
    assert next_unit_in_group("l") == "ml"
    assert next_unit_in_group("szt.") is None
