"""
Membership API endpoints, mounted under both parents.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.db import Database, get_db
from core.fields import IdPath
from core.responses import ok

from . import schemas, service

router = APIRouter(prefix="/api")


@router.get("/projects/{project_id}/assignees")
async def list_project_assignees(project_id: IdPath, db: Database = Depends(get_db)) -> dict:
    return ok(await service.list_project_assignees(db, project_id))


@router.post("/projects/{project_id}/assignees", status_code=status.HTTP_201_CREATED)
async def add_assignee_to_project(
    project_id: IdPath,
    payload: schemas.AddAssigneeToProject,
    db: Database = Depends(get_db),
) -> dict:
    row = await service.assign(
        db,
        project_id=project_id,
        assignee_id=payload.assignee_id,
        role_in_project=payload.role_in_project,
    )
    return ok(row, "Assignee added to project")


@router.delete("/projects/{project_id}/assignees/{assignee_id}")
async def remove_assignee_from_project(
    project_id: IdPath,
    assignee_id: IdPath,
    db: Database = Depends(get_db),
) -> dict:
    result = await service.unassign(db, project_id=project_id, assignee_id=assignee_id)
    return ok(result, "Assignee removed from project")


@router.get("/assignees/{assignee_id}/projects")
async def list_assignee_projects(assignee_id: IdPath, db: Database = Depends(get_db)) -> dict:
    return ok(await service.list_assignee_projects(db, assignee_id))


@router.post("/assignees/{assignee_id}/projects", status_code=status.HTTP_201_CREATED)
async def add_project_to_assignee(
    assignee_id: IdPath,
    payload: schemas.AddProjectToAssignee,
    db: Database = Depends(get_db),
) -> dict:
    row = await service.assign(
        db,
        project_id=payload.project_id,
        assignee_id=assignee_id,
        role_in_project=payload.role_in_project,
    )
    return ok(row, "Project added to assignee")


@router.delete("/assignees/{assignee_id}/projects/{project_id}")
async def remove_project_from_assignee(
    assignee_id: IdPath,
    project_id: IdPath,
    db: Database = Depends(get_db),
) -> dict:
    result = await service.unassign(db, project_id=project_id, assignee_id=assignee_id)
    return ok(result, "Project removed from assignee")
