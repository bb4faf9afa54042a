from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from core.db import get_db
from main import create_app

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeDatabase:
    """
    Stand-in for core.db.Database in router tests.

    Tests monkeypatch the repository functions, so this only has to satisfy
    the bits services touch directly.
    """

    @asynccontextmanager
    async def transaction(self):
        yield self


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(fake_db: FakeDatabase, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.delenv("AUTH_REQUIRED", raising=False)
    monkeypatch.delenv("ADMIN_ROUTES_ENABLED", raising=False)
    app = create_app()
    app.dependency_overrides[get_db] = lambda: fake_db
    # No `with`: the lifespan (and its real pool) is never started.
    return TestClient(app)


def task_row(**overrides) -> dict:
    row = {
        "id": 1,
        "title": "Design Homepage",
        "description": None,
        "status": "Todo",
        "priority": "Medium",
        "due_date": None,
        "project_id": 1,
        "assignee_id": 1,
        "completed": False,
        "created_at": NOW,
        "updated_at": NOW,
        "project_title": "Website Redesign",
        "assignee_name": "Jane Smith",
    }
    row.update(overrides)
    return row


def assignee_row(**overrides) -> dict:
    row = {
        "id": 1,
        "name": "Jane Smith",
        "email": "jane@example.com",
        "role": "member",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


def project_row(**overrides) -> dict:
    row = {
        "id": 1,
        "title": "Website Redesign",
        "description": None,
        "status": "Active",
        "priority": "Medium",
        "owner_id": None,
        "start_date": None,
        "end_date": None,
        "created_at": NOW,
        "updated_at": NOW,
        "owner_name": None,
        "owner_email": None,
    }
    row.update(overrides)
    return row
