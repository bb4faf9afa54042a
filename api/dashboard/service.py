"""
Dashboard statistics.

The three count queries are independent, so they run concurrently on
separate pool connections.
"""

from __future__ import annotations

import asyncio
from typing import Any

from core.db import Database

from . import repository


def _as_ints(row: dict[str, Any]) -> dict[str, int]:
    return {key: int(value or 0) for key, value in row.items()}


async def stats(db: Database) -> dict[str, dict[str, int]]:
    projects, tasks, assignees = await asyncio.gather(
        repository.project_counts(db),
        repository.task_counts(db),
        repository.assignee_counts(db),
    )
    return {
        "projects": _as_ints(projects),
        "tasks": _as_ints(tasks),
        "assignees": _as_ints(assignees),
    }
