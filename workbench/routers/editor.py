"""Recipe editor sessions.

A session carries the ingredient rows being edited and the per-row display
unit overrides. Sessions live in Redis only; saving writes the rows in their
stored (quantity, unit) form through the recipe store.

Endpoints (prefix /api/editor):
- POST /sessions - Open a session (blank or from a recipe)
- GET /sessions/{id} - Rows as displayed + aggregation
- DELETE /sessions/{id} - Discard the session
- POST /sessions/{id}/ingredients - Add a manual row
- POST /sessions/{id}/ingredients/from-inventory/{item_id} - Add an inventory item
- PATCH /sessions/{id}/ingredients/{index} - Edit row fields
- DELETE /sessions/{id}/ingredients/{index} - Remove a row
- POST /sessions/{id}/ingredients/{index}/move - Reorder
- POST /sessions/{id}/ingredients/{index}/toggle-unit - Cycle the shown unit
- PUT /sessions/{id}/ingredients/{index}/quantity - Set quantity (display or native)
- POST /sessions/{id}/restore-units - Drop every display override
- POST /sessions/{id}/save - Persist as a recipe (create or new version)
"""

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_user_id, get_workspace
from ..models import InventoryItem, Workspace
from ..rate_limit import editor_save_limit, limiter
from ..schemas import (
    AggregationOut, DeleteResponse, EditorIngredientAdd, EditorIngredientPatch,
    EditorMoveRequest, EditorQuantitySet, EditorSaveRequest, EditorSessionCreate,
    EditorSessionOut, RecipeOut,
)
from ..services import editor_sessions, recipe_store
from ..services.recipe_editor import RecipeEditor

router = APIRouter(prefix="/editor")
logger = logging.getLogger("workbench.editor")


def _session_out(session_id: str, editor: RecipeEditor) -> EditorSessionOut:
    return EditorSessionOut(
        session_id=session_id,
        recipe_id=editor.recipe_id,
        show_display_units=editor.display.show_display_units,
        rows=editor.display_rows(),
        aggregation=AggregationOut.from_result(editor.aggregation),
        problems=editor.validate(),
    )


def _load_or_404(workspace: Workspace, session_id: str) -> RecipeEditor:
    editor = editor_sessions.load_session(workspace.id, session_id)
    if editor is None:
        raise HTTPException(status_code=404, detail="Editor session not found or expired")
    return editor


def _apply(workspace: Workspace, session_id: str, change: Callable[[RecipeEditor], None]) -> EditorSessionOut:
    editor = _load_or_404(workspace, session_id)
    try:
        change(editor)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    editor_sessions.save_session(workspace.id, session_id, editor)
    return _session_out(session_id, editor)


@router.post("/sessions", response_model=EditorSessionOut, status_code=201)
def open_session(
    payload: EditorSessionCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    if payload.recipe_id:
        recipe = recipe_store.get_recipe(db, workspace.id, payload.recipe_id)
        if not recipe:
            raise HTTPException(status_code=404, detail="Recipe not found")
        editor = editor_sessions.editor_from_recipe(recipe)
    else:
        editor = RecipeEditor()

    session_id = editor_sessions.open_session(workspace.id, editor)
    return _session_out(session_id, editor)


@router.get("/sessions/{session_id}", response_model=EditorSessionOut)
def get_session(session_id: str, workspace: Workspace = Depends(get_workspace)):
    return _session_out(session_id, _load_or_404(workspace, session_id))


@router.delete("/sessions/{session_id}", response_model=DeleteResponse)
def discard_session(session_id: str, workspace: Workspace = Depends(get_workspace)):
    if not editor_sessions.close_session(workspace.id, session_id):
        raise HTTPException(status_code=404, detail="Editor session not found or expired")
    return DeleteResponse()


@router.post("/sessions/{session_id}/ingredients", response_model=EditorSessionOut)
def add_ingredient(
    session_id: str,
    payload: EditorIngredientAdd,
    workspace: Workspace = Depends(get_workspace),
):
    return _apply(workspace, session_id, lambda ed: ed.add_ingredient(**payload.model_dump()))


@router.post("/sessions/{session_id}/ingredients/from-inventory/{item_id}", response_model=EditorSessionOut)
def add_from_inventory(
    session_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    item = db.query(InventoryItem).filter(
        InventoryItem.id == item_id,
        InventoryItem.workspace_id == workspace.id,
    ).first()
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return _apply(workspace, session_id, lambda ed: ed.add_from_inventory(item))


@router.patch("/sessions/{session_id}/ingredients/{index}", response_model=EditorSessionOut)
def update_ingredient(
    session_id: str,
    index: int,
    payload: EditorIngredientPatch,
    workspace: Workspace = Depends(get_workspace),
):
    fields = payload.model_dump(exclude_unset=True)
    return _apply(workspace, session_id, lambda ed: ed.update_ingredient(index, **fields))


@router.delete("/sessions/{session_id}/ingredients/{index}", response_model=EditorSessionOut)
def remove_ingredient(
    session_id: str,
    index: int,
    workspace: Workspace = Depends(get_workspace),
):
    return _apply(workspace, session_id, lambda ed: ed.remove_ingredient(index))


@router.post("/sessions/{session_id}/ingredients/{index}/move", response_model=EditorSessionOut)
def move_ingredient(
    session_id: str,
    index: int,
    payload: EditorMoveRequest,
    workspace: Workspace = Depends(get_workspace),
):
    return _apply(workspace, session_id, lambda ed: ed.move_ingredient(index, payload.to_index))


@router.post("/sessions/{session_id}/ingredients/{index}/toggle-unit", response_model=EditorSessionOut)
def toggle_unit(
    session_id: str,
    index: int,
    workspace: Workspace = Depends(get_workspace),
):
    return _apply(workspace, session_id, lambda ed: ed.toggle_unit(index))


@router.put("/sessions/{session_id}/ingredients/{index}/quantity", response_model=EditorSessionOut)
def set_quantity(
    session_id: str,
    index: int,
    payload: EditorQuantitySet,
    workspace: Workspace = Depends(get_workspace),
):
    def change(ed: RecipeEditor):
        if payload.in_display_unit:
            ed.set_display_quantity(index, payload.value)
        else:
            ed.set_quantity(index, payload.value)

    return _apply(workspace, session_id, change)


@router.post("/sessions/{session_id}/restore-units", response_model=EditorSessionOut)
def restore_units(session_id: str, workspace: Workspace = Depends(get_workspace)):
    return _apply(workspace, session_id, lambda ed: ed.restore_original_units())


@router.post("/sessions/{session_id}/save", response_model=RecipeOut)
@limiter.limit(editor_save_limit)
def save_session(
    request: Request,  # required by the rate limiter
    session_id: str,
    payload: EditorSaveRequest,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    user_id: Optional[str] = Depends(get_user_id),
):
    """Persist the session rows in their stored units; display overrides are dropped."""
    editor = _load_or_404(workspace, session_id)

    problems = editor.validate()
    if problems:
        raise HTTPException(status_code=422, detail={"problems": problems})

    fields = payload.model_dump(exclude_none=True)
    rows = editor.to_persisted_rows()

    if editor.recipe_id:
        recipe = recipe_store.get_recipe(db, workspace.id, editor.recipe_id)
        if not recipe:
            raise HTTPException(status_code=404, detail="Recipe not found")
        recipe = recipe_store.update_recipe(db, recipe, fields, rows, user_id)
    else:
        if not fields.get("name"):
            raise HTTPException(status_code=400, detail="Recipe name is required for a new recipe")
        recipe = recipe_store.create_recipe(db, workspace.id, fields, rows, user_id)
        editor.recipe_id = recipe.id

    editor_sessions.save_session(workspace.id, session_id, editor)
    logger.info("Saved editor session %s to recipe %s v%d", session_id, recipe.id, recipe.version)
    return recipe
