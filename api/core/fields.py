"""
Reusable pydantic field types and the partial-update base model.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

# Postgres SERIAL is int4.
MAX_ID = 2_147_483_647

IdPath = Annotated[int, Path(ge=1, le=MAX_ID)]
IdField = Annotated[int, Field(ge=1, le=MAX_ID)]

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=255)]
Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_lower=True, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$"),
]
Label = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
LongLabel = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class StrictBody(BaseModel):
    model_config = ConfigDict(extra="forbid")


class PartialUpdate(StrictBody):
    """
    Base for PATCH bodies: only fields the client actually sent are applied.

    Subclasses list the NOT NULL columns in `non_nullable`; sending an
    explicit null for one of them is rejected here instead of at the DB.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def check_changes(self) -> PartialUpdate:
        if not self.model_fields_set:
            raise ValueError("At least one field is required.")
        for name in sorted(self.model_fields_set & self.non_nullable):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
