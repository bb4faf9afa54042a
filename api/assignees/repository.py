"""
Assignee persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database
from core.sql import BUMP_UPDATED_AT, build_assignments

UPDATABLE_COLUMNS = {
    "name": "name",
    "email": "email",
    "role": "role",
}

_COLUMNS = "id, name, email, role, created_at, updated_at"


async def list_assignees(db: Database, *, role: str | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM assignees
        WHERE ($1::text IS NULL OR role = $1)
        ORDER BY created_at DESC, id DESC
        """,
        role,
    )


async def get_assignee(db: Database, assignee_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM assignees
        WHERE id = $1
        """,
        assignee_id,
    )


async def assignee_exists(db: Database, assignee_id: int) -> bool:
    row = await db.fetch_one("SELECT 1 AS ok FROM assignees WHERE id = $1", assignee_id)
    return row is not None


async def create_assignee(db: Database, *, name: str, email: str, role: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO assignees (name, email, role)
        VALUES ($1, $2, $3)
        RETURNING {_COLUMNS}
        """,
        name,
        email,
        role,
    )
    if row is None:
        raise RuntimeError("Failed to create assignee.")
    return row


async def update_assignee(db: Database, assignee_id: int, changes: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = build_assignments(UPDATABLE_COLUMNS, changes, first_param=2)
    return await db.fetch_one(
        f"""
        UPDATE assignees
        SET {", ".join(assignments)}, {BUMP_UPDATED_AT}
        WHERE id = $1
        RETURNING {_COLUMNS}
        """,
        assignee_id,
        *args,
    )


async def delete_assignee(db: Database, assignee_id: int) -> dict[str, int] | None:
    """
    Delete an assignee and report what the FK policy did to dependents.

    Tasks and owned projects are kept with their reference set to NULL;
    project memberships are removed. Returns None when the id is unknown.
    """
    async with db.transaction() as tx:
        # Row lock keeps concurrent inserts from referencing it mid-count.
        locked = await tx.fetch_one("SELECT id FROM assignees WHERE id = $1 FOR UPDATE", assignee_id)
        if locked is None:
            return None
        counts = await tx.fetch_one(
            """
            SELECT
              (SELECT count(*) FROM tasks WHERE assignee_id = $1) AS unassigned_tasks,
              (SELECT count(*) FROM projects WHERE owner_id = $1) AS unowned_projects,
              (SELECT count(*) FROM project_assignees WHERE assignee_id = $1) AS removed_memberships
            """,
            assignee_id,
        )
        await tx.execute("DELETE FROM assignees WHERE id = $1", assignee_id)
    return {key: int(value) for key, value in (counts or {}).items()}
