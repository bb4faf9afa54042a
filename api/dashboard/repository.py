"""
Dashboard aggregate queries (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database


async def project_counts(db: Database) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        SELECT count(*) AS total_projects,
               count(*) FILTER (WHERE lower(status) = 'active') AS active_projects
        FROM projects
        """
    )
    return row or {"total_projects": 0, "active_projects": 0}


async def task_counts(db: Database) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        SELECT count(*) AS total_tasks,
               count(*) FILTER (WHERE completed) AS completed_tasks
        FROM tasks
        """
    )
    return row or {"total_tasks": 0, "completed_tasks": 0}


async def assignee_counts(db: Database) -> dict[str, Any]:
    row = await db.fetch_one("SELECT count(*) AS total_assignees FROM assignees")
    return row or {"total_assignees": 0}
