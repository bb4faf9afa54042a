"""
Task business logic.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from core.db import Database

from . import repository, schemas

NOT_FOUND = "Task not found."


async def require_task(db: Database, task_id: int) -> dict[str, Any]:
    row = await repository.get_task(db, task_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return row


async def list_tasks(db: Database, **filters: Any) -> list[dict[str, Any]]:
    return await repository.list_tasks(db, **filters)


async def create_task(db: Database, payload: schemas.TaskCreate) -> dict[str, Any]:
    return await repository.create_task(db, **payload.model_dump())


async def update_task(db: Database, task_id: int, payload: schemas.TaskUpdate) -> dict[str, Any]:
    row = await repository.update_task(db, task_id, payload.changes())
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return row


async def delete_task(db: Database, task_id: int) -> dict[str, Any]:
    if not await repository.delete_task(db, task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    # Nothing references tasks, so there is never a dependent to report.
    return {"id": task_id, "affected": {}}
