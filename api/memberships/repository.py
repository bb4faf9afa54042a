"""
Membership persistence (raw SQL) for the project_assignees junction.
"""

from __future__ import annotations

from typing import Any

from core.db import Database
from core.sql import affected_rows


async def list_project_assignees(db: Database, project_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT a.id, a.name, a.email, a.role, a.created_at, a.updated_at,
               pa.role_in_project, pa.assigned_at
        FROM project_assignees pa
        JOIN assignees a ON a.id = pa.assignee_id
        WHERE pa.project_id = $1
        ORDER BY pa.assigned_at DESC, pa.id DESC
        """,
        project_id,
    )


async def list_assignee_projects(db: Database, assignee_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT p.id, p.title, p.description, p.status, p.priority, p.owner_id,
               p.start_date, p.end_date, p.created_at, p.updated_at,
               pa.role_in_project, pa.assigned_at
        FROM project_assignees pa
        JOIN projects p ON p.id = pa.project_id
        WHERE pa.assignee_id = $1
        ORDER BY pa.assigned_at DESC, pa.id DESC
        """,
        assignee_id,
    )


async def add_membership(
    db: Database,
    *,
    project_id: int,
    assignee_id: int,
    role_in_project: str,
) -> dict[str, Any]:
    """
    Insert one (project, assignee) pair.

    A duplicate pair fails on uq_project_assignees_pair and surfaces as a
    ConflictError; unknown ids fail on the FKs as ReferenceNotFoundError.
    """
    row = await db.fetch_one(
        """
        INSERT INTO project_assignees (project_id, assignee_id, role_in_project)
        VALUES ($1, $2, $3)
        RETURNING id, project_id, assignee_id, role_in_project, assigned_at
        """,
        project_id,
        assignee_id,
        role_in_project,
    )
    if row is None:
        raise RuntimeError("Failed to add project membership.")
    return row


async def remove_membership(db: Database, *, project_id: int, assignee_id: int) -> bool:
    status = await db.execute(
        """
        DELETE FROM project_assignees
        WHERE project_id = $1
          AND assignee_id = $2
        """,
        project_id,
        assignee_id,
    )
    return affected_rows(status) > 0
