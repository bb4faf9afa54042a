"""
Store error taxonomy and asyncpg error translation.

Repositories never see raw asyncpg exceptions: `core.db.Database` funnels
them through `translate_error`, and `main.py` renders any `StoreError` as an
envelope with the matching status code.
"""

from __future__ import annotations

import logging

import asyncpg

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    status_code = 500

    def __init__(self, message: str = "Database error.") -> None:
        super().__init__(message)
        self.message = message


class StoreUnavailableError(StoreError):
    status_code = 500


class InvalidDataError(StoreError):
    status_code = 400


class ReferenceNotFoundError(StoreError):
    status_code = 404


class ConflictError(StoreError):
    status_code = 409


# Constraint names are fixed in core/schema.py.
CONSTRAINT_MESSAGES: dict[str, str] = {
    "uq_assignees_email": "An assignee with this email already exists.",
    "uq_project_assignees_pair": "Assignee is already assigned to this project.",
    "uq_users_email": "Email is already registered.",
    "fk_projects_owner": "Owner assignee not found.",
    "fk_tasks_project": "Project not found.",
    "fk_tasks_assignee": "Assignee not found.",
    "fk_project_assignees_project": "Project not found.",
    "fk_project_assignees_assignee": "Assignee not found.",
    "ck_projects_date_range": "end_date must not be before start_date.",
}


def _message_for(exc: asyncpg.PostgresError, fallback: str) -> str:
    constraint = getattr(exc, "constraint_name", None) or ""
    return CONSTRAINT_MESSAGES.get(constraint, fallback)


def translate_error(exc: asyncpg.PostgresError) -> StoreError:
    """
    Map a server-side asyncpg error onto the store taxonomy.
    """
    sqlstate = getattr(exc, "sqlstate", None) or ""
    constraint = getattr(exc, "constraint_name", None)

    if isinstance(exc, asyncpg.UniqueViolationError):
        translated: StoreError = ConflictError(_message_for(exc, "Resource already exists."))
    elif isinstance(exc, asyncpg.ForeignKeyViolationError):
        translated = ReferenceNotFoundError(_message_for(exc, "Referenced resource not found."))
    elif isinstance(exc, (asyncpg.NotNullViolationError, asyncpg.CheckViolationError)):
        translated = InvalidDataError(_message_for(exc, "Invalid field value."))
    elif sqlstate.startswith("22"):
        translated = InvalidDataError("Invalid field value.")
    else:
        translated = StoreError("Database error.")

    logger.warning(
        "store_error sqlstate=%s constraint=%s translated=%s detail=%s",
        sqlstate or None,
        constraint,
        type(translated).__name__,
        exc,
    )
    return translated
