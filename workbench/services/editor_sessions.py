"""Redis-backed storage for recipe editing sessions.

A session holds the editor rows and the display overrides. It expires on
its own (TTL refreshed on every save) and is never copied to the database;
only `RecipeEditor.to_persisted_rows()` reaches the recipe tables.
"""

import logging
import uuid
from typing import Optional

from ..infra.redis_cache import delete_key, get_json, set_json
from ..models import Recipe
from ..settings import settings
from .recipe_editor import IngredientRow, RecipeEditor

logger = logging.getLogger("workbench.editor")


def _session_key(workspace_id: str, session_id: str) -> str:
    return f"workbench:editor:{workspace_id}:{session_id}"


def editor_from_recipe(recipe: Recipe) -> RecipeEditor:
    rows = [
        IngredientRow(
            name=ing.name,
            quantity="" if ing.quantity is None else ing.quantity,
            unit=ing.unit,
            inventory_id=ing.inventory_id,
            cas_number=ing.cas_number,
            notes=ing.notes,
            allergens=list(ing.allergens or []),
        )
        for ing in recipe.ingredients
    ]
    return RecipeEditor(rows, recipe_id=recipe.id)


def open_session(workspace_id: str, editor: RecipeEditor) -> str:
    session_id = str(uuid.uuid4())
    save_session(workspace_id, session_id, editor)
    logger.info("Opened editor session %s (recipe=%s)", session_id, editor.recipe_id)
    return session_id


def save_session(workspace_id: str, session_id: str, editor: RecipeEditor) -> None:
    set_json(_session_key(workspace_id, session_id), editor.to_dict(), settings.editor_session_ttl_sec)


def load_session(workspace_id: str, session_id: str) -> Optional[RecipeEditor]:
    data = get_json(_session_key(workspace_id, session_id))
    if data is None:
        return None
    return RecipeEditor.from_dict(data)


def close_session(workspace_id: str, session_id: str) -> bool:
    closed = delete_key(_session_key(workspace_id, session_id))
    if closed:
        logger.info("Closed editor session %s", session_id)
    return closed
