"""Recipes CRUD API router.

Endpoints:
- GET /api/recipes - List recipes in workspace (search, customer filter)
- POST /api/recipes - Create recipe (version 1)
- POST /api/recipes/aggregate - Weight total/percentages for posted rows
- GET /api/recipes/{id} - Get recipe with ingredients
- PATCH /api/recipes/{id} - Update recipe (new version)
- DELETE /api/recipes/{id} - Delete recipe and its versions
- GET /api/recipes/{id}/summary - Weight total/percentages of stored rows
- GET /api/recipes/{id}/versions - Version history, newest first
- GET /api/recipes/{id}/versions/{version} - One snapshot
- POST /api/recipes/{id}/versions/{version}/restore - Restore as new version
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_user_id, get_workspace
from ..models import Recipe, RecipeIngredient, Workspace
from ..schemas import (
    AggregateRequest, AggregationOut, DeleteResponse, RecipeCreate, RecipeListOut,
    RecipeOut, RecipePatch, RecipeVersionOut,
)
from ..services import recipe_store
from ..services.ingredient_aggregation import aggregate_ingredients

router = APIRouter()
logger = logging.getLogger("workbench.recipes")


def _get_recipe_or_404(db: Session, workspace: Workspace, recipe_id: str) -> Recipe:
    recipe = recipe_store.get_recipe(db, workspace.id, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.get("/recipes", response_model=list[RecipeListOut])
def list_recipes(
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: Optional[str] = Query(None),
    customer_id: Optional[str] = Query(None),
):
    """List recipes in the current workspace, most recently updated first."""
    query = db.query(Recipe).filter(Recipe.workspace_id == workspace.id)

    if customer_id:
        query = query.filter(Recipe.customer_id == customer_id)

    if search:
        search_pattern = f"%{search}%"
        query = query.outerjoin(RecipeIngredient).filter(
            or_(
                Recipe.name.ilike(search_pattern),
                RecipeIngredient.name.ilike(search_pattern),
            )
        ).distinct()

    return (
        query
        .order_by(Recipe.updated_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


@router.post("/recipes", response_model=RecipeOut, status_code=201)
def create_recipe(
    payload: RecipeCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    user_id: Optional[str] = Depends(get_user_id),
):
    """Create a recipe. Yield is always stored as 1 szt."""
    fields = payload.model_dump(exclude={"ingredients"})
    ingredients = [ing.model_dump() for ing in payload.ingredients]
    return recipe_store.create_recipe(db, workspace.id, fields, ingredients, user_id)


@router.post("/recipes/aggregate", response_model=AggregationOut)
def aggregate(payload: AggregateRequest):
    """Weight total and per-row percentages for unsaved rows."""
    result = aggregate_ingredients([row.model_dump() for row in payload.ingredients])
    return AggregationOut.from_result(result)


@router.get("/recipes/{recipe_id}", response_model=RecipeOut)
def get_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    return _get_recipe_or_404(db, workspace, recipe_id)


@router.patch("/recipes/{recipe_id}", response_model=RecipeOut)
def update_recipe(
    recipe_id: str,
    payload: RecipePatch,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    user_id: Optional[str] = Depends(get_user_id),
):
    """Update a recipe; every update is stored as a new version."""
    recipe = _get_recipe_or_404(db, workspace, recipe_id)

    updates = payload.model_dump(exclude_unset=True, exclude={"ingredients"})
    ingredients = None
    if payload.ingredients is not None:
        ingredients = [ing.model_dump() for ing in payload.ingredients]

    return recipe_store.update_recipe(db, recipe, updates, ingredients, user_id)


@router.delete("/recipes/{recipe_id}", response_model=DeleteResponse)
def delete_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    recipe = _get_recipe_or_404(db, workspace, recipe_id)
    recipe_store.delete_recipe(db, recipe)
    return DeleteResponse()


@router.get("/recipes/{recipe_id}/summary", response_model=AggregationOut)
def recipe_summary(
    recipe_id: str,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    recipe = _get_recipe_or_404(db, workspace, recipe_id)
    return AggregationOut.from_result(recipe_store.recipe_aggregation(recipe))


@router.get("/recipes/{recipe_id}/versions", response_model=list[RecipeVersionOut])
def list_recipe_versions(
    recipe_id: str,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    recipe = _get_recipe_or_404(db, workspace, recipe_id)
    return recipe_store.list_versions(db, recipe.id)


@router.get("/recipes/{recipe_id}/versions/{version}", response_model=RecipeVersionOut)
def get_recipe_version(
    recipe_id: str,
    version: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    recipe = _get_recipe_or_404(db, workspace, recipe_id)
    stored = recipe_store.get_version(db, recipe.id, version)
    if not stored:
        raise HTTPException(status_code=404, detail=f"Version {version} not found")
    return stored


@router.post("/recipes/{recipe_id}/versions/{version}/restore", response_model=RecipeOut)
def restore_recipe_version(
    recipe_id: str,
    version: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    user_id: Optional[str] = Depends(get_user_id),
):
    recipe = _get_recipe_or_404(db, workspace, recipe_id)
    try:
        return recipe_store.restore_version(db, recipe, version, user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
