import pytest

from workbench.services.recipe_editor import IngredientRow, RecipeEditor


@pytest.fixture
def editor():
    return RecipeEditor([
        IngredientRow(name="Sugar", quantity=500, unit="g"),
        IngredientRow(name="Flour", quantity=1, unit="kg"),
        IngredientRow(name="Capsules", quantity=3, unit="szt."),
    ])


def test_manual_row_defaults(editor):
    index = editor.add_ingredient()
    row = editor.rows[index]
    assert index == 3
    assert row.unit == "g"
    assert row.quantity == ""
    assert row.inventory_id is None


def test_add_from_inventory_links_item(editor):
    index = editor.add_from_inventory({"id": "inv-1", "name": "Citric acid", "unit": "kg", "cas_number": "77-92-9"})
    row = editor.rows[index]
    assert row.inventory_id == "inv-1"
    assert row.name == "Citric acid"
    assert row.unit == "kg"
    assert row.cas_number == "77-92-9"
    assert row.quantity == ""


def test_aggregation_follows_row_changes(editor):
    assert editor.aggregation.total_weight == 1.5
    first = editor.aggregation
    assert editor.aggregation is first

    editor.set_quantity(0, 1000)
    assert editor.aggregation is not first
    assert editor.aggregation.total_weight == 2
    assert editor.aggregation.percentages[:2] == [50, 50]


def test_display_quantity_is_stored_native(editor):
    editor.toggle_unit(0)  # g -> kg
    view = editor.display_rows()[0]
    assert view["display_unit"] == "kg"
    assert view["formatted_quantity"] == "0.5"

    editor.set_display_quantity(0, "0.75")
    assert editor.rows[0].quantity == 750
    assert editor.rows[0].unit == "g"
    assert editor.display_rows()[0]["display_quantity"] == 0.75


def test_toggle_on_pieces_row_does_nothing(editor):
    editor.toggle_unit(2)
    assert editor.display.overrides == {}
    assert editor.display_rows()[2]["can_convert"] is False


def test_unit_change_clears_override(editor):
    editor.toggle_unit(0)
    editor.update_ingredient(0, unit="ml")
    assert 0 not in editor.display.overrides
    assert editor.rows[0].unit == "ml"


def test_update_rejects_unknown_fields(editor):
    with pytest.raises(ValueError):
        editor.update_ingredient(0, colour="red")


def test_out_of_range_rows(editor):
    with pytest.raises(IndexError):
        editor.toggle_unit(7)
    with pytest.raises(IndexError):
        editor.remove_ingredient(-1)


def test_remove_and_move_keep_overrides_on_their_rows(editor):
    editor.toggle_unit(1)  # Flour kg -> g
    editor.remove_ingredient(0)
    assert editor.rows[0].name == "Flour"
    assert editor.display.get_display_unit(0, "kg") == "g"

    editor.move_ingredient(0, 1)
    assert editor.rows[1].name == "Flour"
    assert editor.display.get_display_unit(1, "kg") == "g"
    assert editor.display.get_display_unit(0, "szt.") == "szt."


def test_persisted_rows_have_no_display_state(editor):
    editor.toggle_unit(0)
    persisted = editor.to_persisted_rows()
    assert persisted[0]["quantity"] == 500
    assert persisted[0]["unit"] == "g"
    assert all("display_unit" not in row for row in persisted)


def test_validate_requires_names(editor):
    assert editor.validate() == []
    editor.add_ingredient(name="  ")
    editor.add_ingredient(name="Salt", quantity=-2)
    assert editor.validate() == [
        "Ingredient 4: name is required",
        "Ingredient 5: quantity cannot be negative",
    ]


def test_restore_original_units(editor):
    editor.toggle_unit(0)
    editor.toggle_unit(1)
    editor.restore_original_units()
    views = editor.display_rows()
    assert [v["display_unit"] for v in views] == ["g", "kg", "szt."]
    assert editor.display.show_display_units is False


def test_dict_round_trip(editor):
    editor.recipe_id = "r-1"
    editor.toggle_unit(1)
    restored = RecipeEditor.from_dict(editor.to_dict())
    assert restored.recipe_id == "r-1"
    assert restored.rows == editor.rows
    assert restored.display == editor.display


def test_null_name_and_allergens_clear_to_empty(editor):
    editor.update_ingredient(0, name=None, allergens=None, notes=None)
    row = editor.rows[0]
    assert row.name == ""
    assert row.allergens == []
    assert row.notes is None

    view = editor.display_rows()[0]
    assert view["name"] == ""
    assert view["allergens"] == []


def test_numeric_text_formatted_like_numbers(editor):
    editor.set_quantity(0, "1.23456")
    assert editor.display_rows()[0]["formatted_quantity"] == "1.235"

    editor.set_quantity(0, "2.50")
    assert editor.display_rows()[0]["formatted_quantity"] == "2.5"

    editor.set_quantity(0, "")
    assert editor.display_rows()[0]["formatted_quantity"] == ""
