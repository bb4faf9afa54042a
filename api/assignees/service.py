"""
Assignee business logic.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from core.db import Database
from tasks import repository as task_repository

from . import repository, schemas

NOT_FOUND = "Assignee not found."


async def require_assignee(db: Database, assignee_id: int) -> dict[str, Any]:
    row = await repository.get_assignee(db, assignee_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return row


async def list_assignees(db: Database, *, role: str | None = None) -> list[dict[str, Any]]:
    return await repository.list_assignees(db, role=role)


async def create_assignee(db: Database, payload: schemas.AssigneeCreate) -> dict[str, Any]:
    return await repository.create_assignee(
        db,
        name=payload.name,
        email=payload.email,
        role=payload.role,
    )


async def update_assignee(db: Database, assignee_id: int, payload: schemas.AssigneeUpdate) -> dict[str, Any]:
    row = await repository.update_assignee(db, assignee_id, payload.changes())
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return row


async def delete_assignee(db: Database, assignee_id: int) -> dict[str, Any]:
    affected = await repository.delete_assignee(db, assignee_id)
    if affected is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"id": assignee_id, "affected": affected}


async def list_assignee_tasks(db: Database, assignee_id: int) -> list[dict[str, Any]]:
    await require_assignee(db, assignee_id)
    return await task_repository.list_tasks(db, assignee_id=assignee_id)
