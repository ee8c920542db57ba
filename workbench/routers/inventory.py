"""Inventory lookup: candidate ingredients for the recipe editor."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_workspace
from ..models import InventoryItem, Workspace
from ..schemas import InventoryItemCreate, InventoryItemOut
from ..services.categories import category_color

router = APIRouter()


def _item_to_out(item: InventoryItem) -> InventoryItemOut:
    return InventoryItemOut(
        id=item.id,
        name=item.name,
        unit=item.unit,
        cas_number=item.cas_number,
        category=item.category,
        category_color=category_color(item.category),
    )


@router.get("/inventory", response_model=list[InventoryItemOut])
def list_inventory(
    search: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    query = db.query(InventoryItem).filter(InventoryItem.workspace_id == workspace.id)
    if search:
        query = query.filter(InventoryItem.name.ilike(f"%{search}%"))
    items = query.order_by(InventoryItem.name).limit(limit).all()
    return [_item_to_out(i) for i in items]


@router.post("/inventory", response_model=InventoryItemOut, status_code=201)
def create_inventory_item(
    payload: InventoryItemCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
):
    item = InventoryItem(workspace_id=workspace.id, **payload.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return _item_to_out(item)
