"""
Project persistence (raw SQL).

Reads always join the owner so list/get/create/update return one shape.
"""

from __future__ import annotations

from typing import Any

from core.db import Database
from core.sql import BUMP_UPDATED_AT, build_assignments

UPDATABLE_COLUMNS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "owner_id": "owner_id",
    "start_date": "start_date",
    "end_date": "end_date",
}

_SELECT_FROM = """
    SELECT p.id, p.title, p.description, p.status, p.priority, p.owner_id,
           p.start_date, p.end_date, p.created_at, p.updated_at,
           a.name AS owner_name, a.email AS owner_email
    FROM {source} p
    LEFT JOIN assignees a ON a.id = p.owner_id
"""


def _select(source: str = "projects") -> str:
    return _SELECT_FROM.format(source=source)


async def list_projects(
    db: Database,
    *,
    status: str | None = None,
    owner_id: int | None = None,
) -> list[dict[str, Any]]:
    return await db.fetch_all(
        _select()
        + """
        WHERE ($1::text IS NULL OR p.status = $1)
          AND ($2::int IS NULL OR p.owner_id = $2)
        ORDER BY p.created_at DESC, p.id DESC
        """,
        status,
        owner_id,
    )


async def get_project(db: Database, project_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(_select() + " WHERE p.id = $1", project_id)


async def project_exists(db: Database, project_id: int) -> bool:
    row = await db.fetch_one("SELECT 1 AS ok FROM projects WHERE id = $1", project_id)
    return row is not None


async def create_project(
    db: Database,
    *,
    title: str,
    description: str | None,
    status: str,
    priority: str,
    owner_id: int | None,
    start_date: Any,
    end_date: Any,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        WITH inserted AS (
          INSERT INTO projects (title, description, status, priority, owner_id, start_date, end_date)
          VALUES ($1, $2, $3, $4, $5, $6, $7)
          RETURNING *
        )
        """
        + _select("inserted"),
        title,
        description,
        status,
        priority,
        owner_id,
        start_date,
        end_date,
    )
    if row is None:
        raise RuntimeError("Failed to create project.")
    return row


async def update_project(db: Database, project_id: int, changes: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = build_assignments(UPDATABLE_COLUMNS, changes, first_param=2)
    return await db.fetch_one(
        f"""
        WITH updated AS (
          UPDATE projects
          SET {", ".join(assignments)}, {BUMP_UPDATED_AT}
          WHERE id = $1
          RETURNING *
        )
        """
        + _select("updated"),
        project_id,
        *args,
    )


async def delete_project(db: Database, project_id: int) -> dict[str, int] | None:
    """
    Delete a project; its tasks and memberships go with it (ON DELETE CASCADE).

    Returns the cascade counts, or None when the id is unknown.
    """
    async with db.transaction() as tx:
        locked = await tx.fetch_one("SELECT id FROM projects WHERE id = $1 FOR UPDATE", project_id)
        if locked is None:
            return None
        counts = await tx.fetch_one(
            """
            SELECT
              (SELECT count(*) FROM tasks WHERE project_id = $1) AS deleted_tasks,
              (SELECT count(*) FROM project_assignees WHERE project_id = $1) AS removed_memberships
            """,
            project_id,
        )
        await tx.execute("DELETE FROM projects WHERE id = $1", project_id)
    return {key: int(value) for key, value in (counts or {}).items()}
