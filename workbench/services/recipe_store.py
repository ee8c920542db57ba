"""Recipe persistence with version history.

Every create, update and restore bumps the recipe version and writes an
immutable RecipeVersion snapshot. Yield is forced to 1 piece on every write.
"""

import logging
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from ..models import Recipe, RecipeIngredient, RecipeVersion, YIELD_QUANTITY, YIELD_UNIT
from .ingredient_aggregation import AggregationResult, aggregate_ingredients

logger = logging.getLogger("workbench.recipes")

HEADER_FIELDS = (
    "name",
    "description",
    "instructions",
    "notes",
    "prep_time",
    "status",
    "allergens",
    "customer_id",
)

INGREDIENT_FIELDS = ("name", "quantity", "unit", "inventory_id", "cas_number", "notes", "allergens")


def get_recipe(db: Session, workspace_id: str, recipe_id: str) -> Optional[Recipe]:
    return (
        db.query(Recipe)
        .filter(Recipe.id == recipe_id, Recipe.workspace_id == workspace_id)
        .first()
    )


def snapshot(recipe: Recipe) -> dict:
    data: dict[str, Any] = {f: getattr(recipe, f) for f in HEADER_FIELDS}
    data["yield"] = {"quantity": recipe.yield_quantity, "unit": recipe.yield_unit}
    data["version"] = recipe.version
    data["ingredients"] = [
        {f: getattr(ing, f) for f in INGREDIENT_FIELDS}
        for ing in recipe.ingredients
    ]
    return data


def _apply_header(recipe: Recipe, fields: dict) -> None:
    for key in HEADER_FIELDS:
        if key in fields:
            setattr(recipe, key, fields[key])
    recipe.yield_quantity = YIELD_QUANTITY
    recipe.yield_unit = YIELD_UNIT


def _replace_ingredients(recipe: Recipe, rows: Iterable[dict]) -> None:
    recipe.ingredients = [
        RecipeIngredient(
            position=i,
            name=row["name"],
            quantity=row.get("quantity"),
            unit=row.get("unit") or "g",
            inventory_id=row.get("inventory_id"),
            cas_number=row.get("cas_number"),
            notes=row.get("notes"),
            allergens=list(row.get("allergens") or []),
        )
        for i, row in enumerate(rows)
    ]


def _record_version(db: Session, recipe: Recipe, user_id: Optional[str], restored_from: Optional[int] = None) -> None:
    db.flush()
    db.add(RecipeVersion(
        recipe_id=recipe.id,
        version=recipe.version,
        data=snapshot(recipe),
        restored_from=restored_from,
        created_by=user_id,
    ))


def create_recipe(
    db: Session,
    workspace_id: str,
    fields: dict,
    ingredients: Iterable[dict],
    user_id: Optional[str] = None,
) -> Recipe:
    recipe = Recipe(workspace_id=workspace_id, version=1, created_by=user_id, updated_by=user_id)
    _apply_header(recipe, fields)
    _replace_ingredients(recipe, ingredients)
    db.add(recipe)
    _record_version(db, recipe, user_id)
    db.commit()
    db.refresh(recipe)
    logger.info("Created recipe %s (%d ingredients)", recipe.id, len(recipe.ingredients))
    return recipe


def update_recipe(
    db: Session,
    recipe: Recipe,
    fields: dict,
    ingredients: Optional[Iterable[dict]] = None,
    user_id: Optional[str] = None,
) -> Recipe:
    """Apply changes as a new version. `ingredients=None` keeps the current rows."""
    _apply_header(recipe, fields)
    if ingredients is not None:
        _replace_ingredients(recipe, ingredients)
    recipe.version = (recipe.version or 0) + 1
    recipe.restored_from = None
    recipe.updated_by = user_id
    _record_version(db, recipe, user_id)
    db.commit()
    db.refresh(recipe)
    logger.info("Updated recipe %s to version %d", recipe.id, recipe.version)
    return recipe


def get_version(db: Session, recipe_id: str, version: int) -> Optional[RecipeVersion]:
    return (
        db.query(RecipeVersion)
        .filter(RecipeVersion.recipe_id == recipe_id, RecipeVersion.version == version)
        .first()
    )


def list_versions(db: Session, recipe_id: str) -> list[RecipeVersion]:
    return (
        db.query(RecipeVersion)
        .filter(RecipeVersion.recipe_id == recipe_id)
        .order_by(RecipeVersion.version.desc())
        .all()
    )


def restore_version(db: Session, recipe: Recipe, version: int, user_id: Optional[str] = None) -> Recipe:
    """Copy a stored snapshot back into the recipe as a new version.

    Raises:
        LookupError if the version does not exist
    """
    stored = get_version(db, recipe.id, version)
    if stored is None:
        raise LookupError(f"Version {version} of recipe {recipe.id} does not exist")

    data = stored.data or {}
    _apply_header(recipe, {k: data.get(k) for k in HEADER_FIELDS if k in data})
    _replace_ingredients(recipe, data.get("ingredients") or [])
    recipe.version = (recipe.version or 0) + 1
    recipe.restored_from = version
    recipe.updated_by = user_id
    _record_version(db, recipe, user_id, restored_from=version)
    db.commit()
    db.refresh(recipe)
    logger.info("Restored recipe %s from version %d as version %d", recipe.id, version, recipe.version)
    return recipe


def delete_recipe(db: Session, recipe: Recipe) -> None:
    recipe_id = recipe.id
    # versions and ingredients go with the recipe (ORM cascade)
    db.delete(recipe)
    db.commit()
    logger.info("Deleted recipe %s with its versions", recipe_id)


def recipe_aggregation(recipe: Recipe) -> AggregationResult:
    return aggregate_ingredients(recipe.ingredients)
