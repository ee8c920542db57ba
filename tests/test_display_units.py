import pytest

from workbench.services.display_units import DisplaySettings


def test_toggle_sets_override_and_enables_display():
    display = DisplaySettings()
    display.toggle_ingredient_unit(0, "g")
    assert display.overrides == {0: "kg"}
    assert display.show_display_units is True
    assert display.get_display_unit(0, "g") == "kg"


def test_toggle_twice_returns_to_stored_unit():
    display = DisplaySettings()
    display.toggle_ingredient_unit(0, "g")
    display.toggle_ingredient_unit(0, "g")
    assert display.get_display_unit(0, "g") == "g"
    assert 0 not in display.overrides


def test_toggle_pieces_is_a_noop():
    display = DisplaySettings()
    display.toggle_ingredient_unit(2, "szt.")
    assert display.overrides == {}
    assert display.show_display_units is False


def test_display_value_converts_from_stored_unit():
    display = DisplaySettings()
    display.toggle_ingredient_unit(0, "g")
    assert display.get_display_value(0, 1500, "g") == 1.5
    # String quantities from the form are parsed first
    assert display.get_display_value(0, "250", "g") == 0.25


def test_display_value_passthrough_cases():
    display = DisplaySettings()
    # No override at all
    assert display.get_display_value(0, 1500, "g") == 1500

    display.toggle_ingredient_unit(0, "g")
    assert display.get_display_value(0, "", "g") == ""
    assert display.get_display_value(0, None, "g") is None
    assert display.get_display_value(0, "abc", "g") == "abc"
    # Other rows are untouched
    assert display.get_display_value(1, 1500, "g") == 1500


def test_overrides_ignored_when_display_mode_off():
    display = DisplaySettings(show_display_units=False, overrides={0: "kg"})
    assert display.get_display_unit(0, "g") == "g"
    assert display.get_display_value(0, 1500, "g") == 1500


def test_restore_original_units_clears_everything():
    display = DisplaySettings()
    display.toggle_ingredient_unit(0, "g")
    display.toggle_ingredient_unit(1, "ml")
    display.restore_original_units()
    assert display.overrides == {}
    assert display.show_display_units is False
    assert display.get_display_unit(1, "ml") == "ml"


def test_to_native_quantity_converts_back():
    display = DisplaySettings()
    display.toggle_ingredient_unit(0, "g")
    # User typed 2 while the row shows kg; stored unit is g
    assert display.to_native_quantity(0, "2", "g") == 2000
    assert display.to_native_quantity(0, 0.5, "g") == 500
    assert display.to_native_quantity(0, "x", "g") == "x"
    assert display.to_native_quantity(1, "7", "g") == "7"


def test_remove_row_shifts_overrides():
    display = DisplaySettings(show_display_units=True, overrides={0: "kg", 1: "l", 3: "kg"})
    display.remove_row(1)
    assert display.overrides == {0: "kg", 2: "kg"}


@pytest.mark.parametrize("src,dst,expected", [
    (0, 2, {2: "kg", 0: "l"}),
    (2, 0, {1: "kg", 2: "l"}),
])
def test_move_row_rekeys_overrides(src, dst, expected):
    display = DisplaySettings(show_display_units=True, overrides={0: "kg", 1: "l"})
    display.move_row(src, dst)
    assert display.overrides == expected


def test_serialization_keeps_int_keys():
    display = DisplaySettings()
    display.toggle_ingredient_unit(3, "ml")
    restored = DisplaySettings.from_dict(display.to_dict())
    assert restored == display
    assert restored.overrides == {3: "l"}
    assert DisplaySettings.from_dict(None) == DisplaySettings()
