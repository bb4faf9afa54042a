"""
Task request schemas.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from pydantic import Field

from core.fields import IdField, Label, PartialUpdate, StrictBody, Title

DEFAULT_STATUS = "Todo"
DEFAULT_PRIORITY = "Medium"


class TaskCreate(StrictBody):
    title: Title
    description: str | None = Field(default=None, max_length=10_000)
    status: Label = DEFAULT_STATUS
    priority: Label = DEFAULT_PRIORITY
    due_date: date | None = None
    project_id: IdField | None = None
    assignee_id: IdField | None = None
    completed: bool = False


class TaskUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"title", "status", "priority", "completed"})

    title: Title | None = None
    description: str | None = Field(default=None, max_length=10_000)
    status: Label | None = None
    priority: Label | None = None
    due_date: date | None = None
    project_id: IdField | None = None
    assignee_id: IdField | None = None
    completed: bool | None = None
