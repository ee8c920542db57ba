"""
Router for unit conversion utilities.
"""

from fastapi import APIRouter

from ..schemas import UnitConvertRequest, UnitConvertResponse, UnitsCatalogOut, UnitGroupOut
from ..services.formatting import format_display_value
from ..services.unit_conversion import (
    RECIPE_UNITS,
    UNIT_CONVERSION_FACTORS,
    UNIT_GROUPS,
    ConversionResult,
    can_convert_unit,
    convert_value,
    convert_value_checked,
)

router = APIRouter()


@router.get("", response_model=UnitsCatalogOut)
def list_units():
    """Unit groups, factors and the units offered by the recipe editor."""
    return UnitsCatalogOut(
        groups=[UnitGroupOut(group=g.value, units=units) for g, units in UNIT_GROUPS.items()],
        factors=UNIT_CONVERSION_FACTORS,
        recipe_units=RECIPE_UNITS,
        convertible={u: can_convert_unit(u) for u in RECIPE_UNITS},
    )


@router.post("/convert", response_model=UnitConvertResponse)
def convert_units(req: UnitConvertRequest):
    """
    Convert a quantity from one unit to another.

    Non-strict requests behave like the editor (no group check). Strict
    requests report unknown or cross-group units in `error`; the status
    stays 200 since the caller can recover.
    """
    if req.strict:
        result = convert_value_checked(req.value, req.from_unit, req.to_unit)
    else:
        result = ConversionResult(
            convert_value(req.value, req.from_unit, req.to_unit),
            req.to_unit or req.from_unit,
        )

    data = result.to_dict()
    data["formatted"] = format_display_value(result.value)
    return UnitConvertResponse(**data)
