"""
Project request schemas.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from pydantic import Field, model_validator

from core.fields import IdField, Label, PartialUpdate, StrictBody, Title

DEFAULT_STATUS = "Active"
DEFAULT_PRIORITY = "Medium"


def _validate_dates(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError("end_date must not be before start_date")


class ProjectCreate(StrictBody):
    title: Title
    description: str | None = Field(default=None, max_length=10_000)
    status: Label = DEFAULT_STATUS
    priority: Label = DEFAULT_PRIORITY
    owner_id: IdField | None = None
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def check_date_range(self) -> ProjectCreate:
        _validate_dates(self.start_date, self.end_date)
        return self


class ProjectUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"title", "status", "priority"})

    title: Title | None = None
    description: str | None = Field(default=None, max_length=10_000)
    status: Label | None = None
    priority: Label | None = None
    owner_id: IdField | None = None
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def check_date_range(self) -> ProjectUpdate:
        # Only checkable here when both ends are sent; the DB CHECK covers the rest.
        _validate_dates(self.start_date, self.end_date)
        return self
