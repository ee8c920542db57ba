"""FastAPI dependencies for the workbench API.

Provides:
- Database session dependency
- Workspace resolution (header → settings slug → first workspace)
- Acting user id (recorded on recipe versions)
"""

import uuid
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from .db import get_db
from .models import Workspace
from .settings import settings


def get_workspace(
    db: Session = Depends(get_db),
    x_workspace_id: Optional[str] = Header(None, alias="X-Workspace-Id"),
) -> Workspace:
    """Resolve workspace via header, settings, or fallback.

    Resolution order:
    1. X-Workspace-Id header (UUID or slug). Unknown values are a 404, never
       a silent fallback to the default workspace.
    2. settings.default_workspace_slug
    3. First workspace in DB

    Raises:
        HTTPException 404 if no workspace found or header is invalid
    """
    workspace: Optional[Workspace] = None

    if x_workspace_id:
        try:
            uuid_obj = uuid.UUID(x_workspace_id)
            workspace = db.get(Workspace, str(uuid_obj))
        except ValueError:
            workspace = db.query(Workspace).filter(Workspace.slug == x_workspace_id).first()

        if workspace:
            return workspace

        raise HTTPException(
            status_code=404,
            detail=f"Workspace '{x_workspace_id}' not found"
        )

    if settings.default_workspace_slug:
        workspace = db.query(Workspace).filter(
            Workspace.slug == settings.default_workspace_slug
        ).first()
        if workspace:
            return workspace

    workspace = db.query(Workspace).order_by(Workspace.created_at).first()
    if workspace:
        return workspace

    raise HTTPException(
        status_code=404,
        detail="No workspace found. Create one with POST /api/workspaces/."
    )


def get_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> Optional[str]:
    # Authentication lives in front of this service; we only record who acted.
    return x_user_id
