"""
Task persistence (raw SQL).

Reads join the project title and assignee name, and create/update return
the same joined shape so a created row equals a later GET of it.
"""

from __future__ import annotations

from typing import Any

from core.db import Database
from core.sql import BUMP_UPDATED_AT, affected_rows, build_assignments

UPDATABLE_COLUMNS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "due_date": "due_date",
    "project_id": "project_id",
    "assignee_id": "assignee_id",
    "completed": "completed",
}

_SELECT_FROM = """
    SELECT t.id, t.title, t.description, t.status, t.priority, t.due_date,
           t.project_id, t.assignee_id, t.completed, t.created_at, t.updated_at,
           p.title AS project_title, a.name AS assignee_name
    FROM {source} t
    LEFT JOIN projects p ON p.id = t.project_id
    LEFT JOIN assignees a ON a.id = t.assignee_id
"""


def _select(source: str = "tasks") -> str:
    return _SELECT_FROM.format(source=source)


async def list_tasks(
    db: Database,
    *,
    project_id: int | None = None,
    assignee_id: int | None = None,
    status: str | None = None,
    completed: bool | None = None,
) -> list[dict[str, Any]]:
    return await db.fetch_all(
        _select()
        + """
        WHERE ($1::int IS NULL OR t.project_id = $1)
          AND ($2::int IS NULL OR t.assignee_id = $2)
          AND ($3::text IS NULL OR t.status = $3)
          AND ($4::boolean IS NULL OR t.completed = $4)
        ORDER BY t.created_at DESC, t.id DESC
        """,
        project_id,
        assignee_id,
        status,
        completed,
    )


async def get_task(db: Database, task_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(_select() + " WHERE t.id = $1", task_id)


async def create_task(
    db: Database,
    *,
    title: str,
    description: str | None,
    status: str,
    priority: str,
    due_date: Any,
    project_id: int | None,
    assignee_id: int | None,
    completed: bool,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        WITH inserted AS (
          INSERT INTO tasks (title, description, status, priority, due_date, project_id, assignee_id, completed)
          VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
          RETURNING *
        )
        """
        + _select("inserted"),
        title,
        description,
        status,
        priority,
        due_date,
        project_id,
        assignee_id,
        completed,
    )
    if row is None:
        raise RuntimeError("Failed to create task.")
    return row


async def update_task(db: Database, task_id: int, changes: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = build_assignments(UPDATABLE_COLUMNS, changes, first_param=2)
    return await db.fetch_one(
        f"""
        WITH updated AS (
          UPDATE tasks
          SET {", ".join(assignments)}, {BUMP_UPDATED_AT}
          WHERE id = $1
          RETURNING *
        )
        """
        + _select("updated"),
        task_id,
        *args,
    )


async def delete_task(db: Database, task_id: int) -> bool:
    status = await db.execute("DELETE FROM tasks WHERE id = $1", task_id)
    return affected_rows(status) > 0
