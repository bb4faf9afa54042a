"""
Assignee request schemas.
"""

from __future__ import annotations

from typing import ClassVar

from core.fields import Email, Label, PartialUpdate, PersonName, StrictBody

DEFAULT_ROLE = "member"


class AssigneeCreate(StrictBody):
    name: PersonName
    email: Email
    role: Label = DEFAULT_ROLE


class AssigneeUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"name", "email", "role"})

    name: PersonName | None = None
    email: Email | None = None
    role: Label | None = None
