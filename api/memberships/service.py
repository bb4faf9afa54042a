"""
Membership business logic.

Both sides of the junction are exposed (/projects/{id}/assignees and
/assignees/{id}/projects); they share these functions.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from assignees import repository as assignee_repository
from core.db import Database
from projects import repository as project_repository

from . import repository

PROJECT_NOT_FOUND = "Project not found."
ASSIGNEE_NOT_FOUND = "Assignee not found."
MEMBERSHIP_NOT_FOUND = "Assignee is not assigned to this project."


async def _require_project(db: Database, project_id: int) -> None:
    if not await project_repository.project_exists(db, project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROJECT_NOT_FOUND)


async def _require_assignee(db: Database, assignee_id: int) -> None:
    if not await assignee_repository.assignee_exists(db, assignee_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ASSIGNEE_NOT_FOUND)


async def list_project_assignees(db: Database, project_id: int) -> list[dict[str, Any]]:
    await _require_project(db, project_id)
    return await repository.list_project_assignees(db, project_id)


async def list_assignee_projects(db: Database, assignee_id: int) -> list[dict[str, Any]]:
    await _require_assignee(db, assignee_id)
    return await repository.list_assignee_projects(db, assignee_id)


async def assign(
    db: Database,
    *,
    project_id: int,
    assignee_id: int,
    role_in_project: str,
) -> dict[str, Any]:
    async with db.transaction() as tx:
        await _require_project(tx, project_id)
        await _require_assignee(tx, assignee_id)
        return await repository.add_membership(
            tx,
            project_id=project_id,
            assignee_id=assignee_id,
            role_in_project=role_in_project,
        )


async def unassign(db: Database, *, project_id: int, assignee_id: int) -> dict[str, Any]:
    await _require_project(db, project_id)
    await _require_assignee(db, assignee_id)
    if not await repository.remove_membership(db, project_id=project_id, assignee_id=assignee_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MEMBERSHIP_NOT_FOUND)
    return {"project_id": project_id, "assignee_id": assignee_id}
