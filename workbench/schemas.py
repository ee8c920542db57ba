"""Pydantic request/response schemas for the workbench API."""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from .services.formatting import format_percentage, format_total_weight

# Quantities arrive the way the editor form holds them: number, text or blank
QuantityIn = Union[float, str, None]


# --- Workspace ---

class WorkspaceOut(BaseModel):
    id: str
    slug: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class WorkspaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


# --- Recipe Ingredient ---

class RecipeIngredientIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    quantity: Optional[float] = Field(None, ge=0)
    unit: str = Field("g", min_length=1, max_length=20)
    inventory_id: Optional[str] = None
    cas_number: Optional[str] = None
    notes: Optional[str] = None
    allergens: list[str] = []


class RecipeIngredientOut(BaseModel):
    id: str
    position: int
    name: str
    quantity: Optional[float]
    unit: str
    inventory_id: Optional[str]
    cas_number: Optional[str]
    notes: Optional[str]
    allergens: Optional[list[str]] = []

    class Config:
        from_attributes = True


# --- Recipe ---

class RecipeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    instructions: Optional[str] = None
    notes: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0)
    status: str = "draft"
    allergens: list[str] = []
    customer_id: Optional[str] = None
    ingredients: list[RecipeIngredientIn] = []


class RecipePatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    instructions: Optional[str] = None
    notes: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0)
    status: Optional[str] = None
    allergens: Optional[list[str]] = None
    customer_id: Optional[str] = None
    ingredients: Optional[list[RecipeIngredientIn]] = None  # Replaces all rows if provided


class RecipeOut(BaseModel):
    id: str
    workspace_id: str
    name: str
    description: Optional[str]
    instructions: Optional[str]
    notes: Optional[str]
    prep_time: Optional[int]
    status: str
    allergens: Optional[list[str]] = []
    customer_id: Optional[str]
    yield_quantity: float
    yield_unit: str
    version: int
    restored_from: Optional[int] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    ingredients: list[RecipeIngredientOut] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RecipeListOut(BaseModel):
    """Lighter recipe model for list views (no ingredients)."""
    id: str
    workspace_id: str
    name: str
    status: str
    customer_id: Optional[str]
    version: int
    updated_at: datetime

    class Config:
        from_attributes = True


class RecipeVersionOut(BaseModel):
    id: str
    recipe_id: str
    version: int
    data: dict[str, Any]
    restored_from: Optional[int] = None
    created_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# --- Aggregation ---

class AggregateRow(BaseModel):
    quantity: QuantityIn = None
    unit: Optional[str] = None


class AggregateRequest(BaseModel):
    ingredients: list[AggregateRow] = []


class AggregationOut(BaseModel):
    total_weight: float
    unit_label: str
    total_grams: float
    percentages: list[Optional[float]]
    total_label: str
    formatted_percentages: list[str]

    @classmethod
    def from_result(cls, result) -> "AggregationOut":
        return cls(
            total_weight=result.total_weight,
            unit_label=result.unit_label,
            total_grams=result.total_grams,
            percentages=result.percentages,
            total_label=format_total_weight(result),
            formatted_percentages=[format_percentage(p) for p in result.percentages],
        )


# --- Units ---

class UnitGroupOut(BaseModel):
    group: str
    units: list[str]


class UnitsCatalogOut(BaseModel):
    groups: list[UnitGroupOut]
    factors: dict[str, float]
    recipe_units: list[str]
    convertible: dict[str, bool]


class UnitConvertRequest(BaseModel):
    value: Optional[float] = None
    from_unit: Optional[str] = None
    to_unit: Optional[str] = None
    strict: bool = False


class ConversionErrorOut(BaseModel):
    code: str
    message: str


class UnitConvertResponse(BaseModel):
    value: Optional[float]
    unit: Optional[str]
    ok: bool
    formatted: str
    error: Optional[ConversionErrorOut] = None


# --- Inventory ---

class InventoryItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    unit: str = Field("g", min_length=1, max_length=20)
    cas_number: Optional[str] = None
    category: Optional[str] = None


class InventoryItemOut(BaseModel):
    id: str
    name: str
    unit: str
    cas_number: Optional[str]
    category: Optional[str]
    category_color: str = "default"

    class Config:
        from_attributes = True


# --- Editor Sessions ---

class EditorSessionCreate(BaseModel):
    recipe_id: Optional[str] = None


class EditorIngredientAdd(BaseModel):
    name: str = ""
    quantity: QuantityIn = ""
    unit: Optional[str] = None
    cas_number: Optional[str] = None
    notes: Optional[str] = None
    allergens: list[str] = []


class EditorIngredientPatch(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    cas_number: Optional[str] = None
    notes: Optional[str] = None
    allergens: Optional[list[str]] = None


class EditorQuantitySet(BaseModel):
    value: QuantityIn = None
    # True when the value was typed in the row's currently shown unit
    in_display_unit: bool = True


class EditorMoveRequest(BaseModel):
    to_index: int = Field(..., ge=0)


class EditorRowOut(BaseModel):
    index: int
    name: str
    quantity: QuantityIn
    unit: str
    display_quantity: QuantityIn
    display_unit: str
    formatted_quantity: str
    can_convert: bool
    percentage: Optional[float]
    formatted_percentage: str
    inventory_id: Optional[str] = None
    cas_number: Optional[str] = None
    notes: Optional[str] = None
    allergens: list[str] = []


class EditorSessionOut(BaseModel):
    session_id: str
    recipe_id: Optional[str]
    show_display_units: bool
    rows: list[EditorRowOut]
    aggregation: AggregationOut
    problems: list[str] = []


class EditorSaveRequest(BaseModel):
    """Recipe header fields; required only when the session has no recipe yet."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    instructions: Optional[str] = None
    notes: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=0)
    status: Optional[str] = None
    allergens: Optional[list[str]] = None
    customer_id: Optional[str] = None


class DeleteResponse(BaseModel):
    ok: bool = True
