"""
Project API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.db import Database, get_db
from core.fields import MAX_ID, IdPath
from core.responses import ok

from . import schemas, service

router = APIRouter(prefix="/api/projects")


@router.get("")
async def list_projects(
    status_filter: str | None = Query(default=None, alias="status", max_length=50),
    owner_id: int | None = Query(default=None, ge=1, le=MAX_ID),
    db: Database = Depends(get_db),
) -> dict:
    return ok(await service.list_projects(db, status=status_filter, owner_id=owner_id))


@router.get("/{project_id}")
async def get_project(project_id: IdPath, db: Database = Depends(get_db)) -> dict:
    return ok(await service.require_project(db, project_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(payload: schemas.ProjectCreate, db: Database = Depends(get_db)) -> dict:
    row = await service.create_project(db, payload)
    return ok(row, "Project created successfully")


@router.patch("/{project_id}")
@router.put("/{project_id}")
async def update_project(
    project_id: IdPath,
    payload: schemas.ProjectUpdate,
    db: Database = Depends(get_db),
) -> dict:
    row = await service.update_project(db, project_id, payload)
    return ok(row, "Project updated successfully")


@router.delete("/{project_id}")
async def delete_project(project_id: IdPath, db: Database = Depends(get_db)) -> dict:
    result = await service.delete_project(db, project_id)
    return ok(result, "Project deleted successfully")


@router.get("/{project_id}/tasks")
async def list_project_tasks(project_id: IdPath, db: Database = Depends(get_db)) -> dict:
    return ok(await service.list_project_tasks(db, project_id))
