"""
Project business logic.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from core.db import Database
from tasks import repository as task_repository

from . import repository, schemas

NOT_FOUND = "Project not found."


async def require_project(db: Database, project_id: int) -> dict[str, Any]:
    row = await repository.get_project(db, project_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return row


async def list_projects(
    db: Database,
    *,
    status: str | None = None,
    owner_id: int | None = None,
) -> list[dict[str, Any]]:
    return await repository.list_projects(db, status=status, owner_id=owner_id)


async def create_project(db: Database, payload: schemas.ProjectCreate) -> dict[str, Any]:
    return await repository.create_project(db, **payload.model_dump())


async def update_project(db: Database, project_id: int, payload: schemas.ProjectUpdate) -> dict[str, Any]:
    row = await repository.update_project(db, project_id, payload.changes())
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return row


async def delete_project(db: Database, project_id: int) -> dict[str, Any]:
    affected = await repository.delete_project(db, project_id)
    if affected is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"id": project_id, "affected": affected}


async def list_project_tasks(db: Database, project_id: int) -> list[dict[str, Any]]:
    if not await repository.project_exists(db, project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return await task_repository.list_tasks(db, project_id=project_id)
