import asyncio
from contextlib import asynccontextmanager

import asyncpg
import pytest

from core.db import Database
from core.errors import (
    ConflictError,
    InvalidDataError,
    ReferenceNotFoundError,
    StoreError,
    StoreUnavailableError,
    translate_error,
)


def _pg_error(cls, constraint=None):
    exc = cls("server says no")
    exc.constraint_name = constraint
    return exc


def test_unique_violation_is_a_conflict_with_a_friendly_message():
    translated = translate_error(_pg_error(asyncpg.UniqueViolationError, "uq_assignees_email"))
    assert isinstance(translated, ConflictError)
    assert translated.status_code == 409
    assert translated.message == "An assignee with this email already exists."


def test_foreign_key_violation_names_the_missing_parent():
    translated = translate_error(_pg_error(asyncpg.ForeignKeyViolationError, "fk_tasks_project"))
    assert isinstance(translated, ReferenceNotFoundError)
    assert translated.status_code == 404
    assert translated.message == "Project not found."


def test_unknown_constraint_falls_back_to_generic_message():
    translated = translate_error(_pg_error(asyncpg.UniqueViolationError, "some_other_index"))
    assert translated.message == "Resource already exists."


def test_not_null_and_check_violations_are_invalid_data():
    assert isinstance(translate_error(_pg_error(asyncpg.NotNullViolationError)), InvalidDataError)
    checked = translate_error(_pg_error(asyncpg.CheckViolationError, "ck_projects_date_range"))
    assert checked.status_code == 400
    assert checked.message == "end_date must not be before start_date."


def test_data_exceptions_are_invalid_data():
    translated = translate_error(asyncpg.exceptions.InvalidTextRepresentationError("bad int"))
    assert isinstance(translated, InvalidDataError)


def test_anything_else_is_a_generic_store_error():
    translated = translate_error(asyncpg.exceptions.UndefinedTableError("relation does not exist"))
    assert type(translated) is StoreError
    assert translated.status_code == 500


class _FailingExecutor:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def fetchrow(self, sql, *args):
        raise self.exc


def test_database_translates_driver_errors():
    db = Database(_FailingExecutor(_pg_error(asyncpg.UniqueViolationError, "uq_project_assignees_pair")))
    with pytest.raises(ConflictError) as excinfo:
        asyncio.run(db.fetch_one("SELECT 1"))
    assert excinfo.value.message == "Assignee is already assigned to this project."


def test_database_maps_connection_failures_to_unavailable():
    db = Database(_FailingExecutor(ConnectionRefusedError("nope")))
    with pytest.raises(StoreUnavailableError):
        asyncio.run(db.fetch_one("SELECT 1"))


class _RecordingConnection:
    def __init__(self) -> None:
        self.transactions = 0

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        yield


def test_nested_transaction_reuses_the_bound_connection():
    conn = _RecordingConnection()
    db = Database(conn, bound=True)

    async def scenario():
        async with db.transaction() as tx:
            assert tx is db
            assert tx.in_transaction

    asyncio.run(scenario())
    assert conn.transactions == 1


def test_seed_is_skipped_for_a_non_empty_database(monkeypatch):
    from core import schema

    async def counts(db):
        return {"assignees": 1, "projects": 0, "tasks": 0, "project_assignees": 0}

    monkeypatch.setattr(schema, "table_counts", counts)
    # The handle is never used once the counts say "not empty".
    assert asyncio.run(schema.seed_sample_data(object())) is False
