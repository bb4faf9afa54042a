"""
Task API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.db import Database, get_db
from core.fields import MAX_ID, IdPath
from core.responses import ok

from . import schemas, service

router = APIRouter(prefix="/api/tasks")


@router.get("")
async def list_tasks(
    project_id: int | None = Query(default=None, ge=1, le=MAX_ID),
    assignee_id: int | None = Query(default=None, ge=1, le=MAX_ID),
    status_filter: str | None = Query(default=None, alias="status", max_length=50),
    completed: bool | None = None,
    db: Database = Depends(get_db),
) -> dict:
    rows = await service.list_tasks(
        db,
        project_id=project_id,
        assignee_id=assignee_id,
        status=status_filter,
        completed=completed,
    )
    return ok(rows)


@router.get("/{task_id}")
async def get_task(task_id: IdPath, db: Database = Depends(get_db)) -> dict:
    return ok(await service.require_task(db, task_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(payload: schemas.TaskCreate, db: Database = Depends(get_db)) -> dict:
    row = await service.create_task(db, payload)
    return ok(row, "Task created successfully")


@router.patch("/{task_id}")
@router.put("/{task_id}")
async def update_task(
    task_id: IdPath,
    payload: schemas.TaskUpdate,
    db: Database = Depends(get_db),
) -> dict:
    row = await service.update_task(db, task_id, payload)
    return ok(row, "Task updated successfully")


@router.delete("/{task_id}")
async def delete_task(task_id: IdPath, db: Database = Depends(get_db)) -> dict:
    result = await service.delete_task(db, task_id)
    return ok(result, "Task deleted successfully")
