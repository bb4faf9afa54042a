"""
Assignee API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.db import Database, get_db
from core.fields import IdPath
from core.responses import ok

from . import schemas, service

router = APIRouter(prefix="/api/assignees")


@router.get("")
async def list_assignees(
    role: str | None = Query(default=None, max_length=50),
    db: Database = Depends(get_db),
) -> dict:
    return ok(await service.list_assignees(db, role=role))


@router.get("/{assignee_id}")
async def get_assignee(assignee_id: IdPath, db: Database = Depends(get_db)) -> dict:
    return ok(await service.require_assignee(db, assignee_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_assignee(payload: schemas.AssigneeCreate, db: Database = Depends(get_db)) -> dict:
    row = await service.create_assignee(db, payload)
    return ok(row, "Assignee created successfully")


@router.patch("/{assignee_id}")
@router.put("/{assignee_id}")
async def update_assignee(
    assignee_id: IdPath,
    payload: schemas.AssigneeUpdate,
    db: Database = Depends(get_db),
) -> dict:
    row = await service.update_assignee(db, assignee_id, payload)
    return ok(row, "Assignee updated successfully")


@router.delete("/{assignee_id}")
async def delete_assignee(assignee_id: IdPath, db: Database = Depends(get_db)) -> dict:
    result = await service.delete_assignee(db, assignee_id)
    return ok(result, "Assignee deleted successfully")


@router.get("/{assignee_id}/tasks")
async def list_assignee_tasks(assignee_id: IdPath, db: Database = Depends(get_db)) -> dict:
    return ok(await service.list_assignee_tasks(db, assignee_id))
