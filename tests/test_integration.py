"""
End-to-end checks against a real PostgreSQL.

Skipped unless TEST_DATABASE_URL points at a disposable database; every
test drops and recreates all tables through the admin reset route.
"""

import os
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from main import create_app

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "").strip()

pytestmark = pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL is not set")


@pytest.fixture
def api(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setenv("ADMIN_ROUTES_ENABLED", "true")
    monkeypatch.delenv("AUTH_REQUIRED", raising=False)
    monkeypatch.delenv("DB_INIT_SCHEMA", raising=False)
    monkeypatch.delenv("DB_SEED_SAMPLE_DATA", raising=False)
    with TestClient(create_app()) as client:
        resp = client.post("/api/admin/reset", params={"seed": "false"})
        assert resp.status_code == 200, resp.text
        yield client


def _create(client, path, payload):
    resp = client.post(path, json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def _people_and_project(client):
    jane = _create(client, "/api/assignees", {"name": "Jane Smith", "email": "jane@example.com"})
    project = _create(client, "/api/projects", {"title": "Website Redesign", "owner_id": jane["id"]})
    return jane, project


def test_created_task_reads_back_identically(api):
    jane, project = _people_and_project(api)
    created = _create(
        api,
        "/api/tasks",
        {"title": "Design Homepage", "project_id": project["id"], "assignee_id": jane["id"]},
    )
    assert created["status"] == "Todo"
    assert created["priority"] == "Medium"
    assert created["project_title"] == "Website Redesign"
    assert created["assignee_name"] == "Jane Smith"

    fetched = api.get(f"/api/tasks/{created['id']}").json()["data"]
    assert fetched == created


def test_duplicate_email_is_rejected_without_a_write(api):
    _create(api, "/api/assignees", {"name": "Jane Smith", "email": "jane@example.com"})
    resp = api.post("/api/assignees", json={"name": "Other Jane", "email": "JANE@example.com"})
    assert resp.status_code == 409
    assert len(api.get("/api/assignees").json()["data"]) == 1


def test_unknown_parent_is_404_without_a_write(api):
    resp = api.post("/api/tasks", json={"title": "Orphan", "project_id": 999})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Project not found."
    assert api.get("/api/tasks").json()["data"] == []


def test_partial_update_keeps_other_fields_and_advances_updated_at(api):
    task = _create(api, "/api/tasks", {"title": "Write docs", "description": "API reference"})
    first = api.patch(f"/api/tasks/{task['id']}", json={"status": "In Progress"}).json()["data"]
    second = api.patch(f"/api/tasks/{task['id']}", json={"status": "Done"}).json()["data"]

    assert second["title"] == "Write docs"
    assert second["description"] == "API reference"
    assert second["created_at"] == task["created_at"]
    assert datetime.fromisoformat(task["updated_at"]) < datetime.fromisoformat(first["updated_at"])
    assert datetime.fromisoformat(first["updated_at"]) < datetime.fromisoformat(second["updated_at"])


def test_deleting_a_project_cascades(api):
    jane, project = _people_and_project(api)
    for title in ("One", "Two"):
        _create(api, "/api/tasks", {"title": title, "project_id": project["id"]})
    _create(api, f"/api/projects/{project['id']}/assignees", {"assignee_id": jane["id"]})

    resp = api.delete(f"/api/projects/{project['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["affected"] == {"deleted_tasks": 2, "removed_memberships": 1}
    assert api.get("/api/tasks").json()["data"] == []
    assert api.get(f"/api/projects/{project['id']}/tasks").status_code == 404
    assert api.get(f"/api/assignees/{jane['id']}/projects").json()["data"] == []


def test_deleting_an_assignee_clears_references(api):
    jane, project = _people_and_project(api)
    task = _create(api, "/api/tasks", {"title": "Design", "project_id": project["id"], "assignee_id": jane["id"]})
    _create(api, f"/api/assignees/{jane['id']}/projects", {"project_id": project["id"], "role_in_project": "Lead"})

    resp = api.delete(f"/api/assignees/{jane['id']}")
    assert resp.json()["data"]["affected"] == {
        "unassigned_tasks": 1,
        "unowned_projects": 1,
        "removed_memberships": 1,
    }
    assert api.get(f"/api/tasks/{task['id']}").json()["data"]["assignee_id"] is None
    assert api.get(f"/api/projects/{project['id']}").json()["data"]["owner_id"] is None
    assert api.get(f"/api/projects/{project['id']}/assignees").json()["data"] == []


def test_membership_pair_is_unique(api):
    jane, project = _people_and_project(api)
    path = f"/api/projects/{project['id']}/assignees"
    _create(api, path, {"assignee_id": jane["id"]})
    assert api.post(path, json={"assignee_id": jane["id"]}).status_code == 409

    members = api.get(path).json()["data"]
    assert [m["role_in_project"] for m in members] == ["Team Member"]

    assert api.delete(f"{path}/{jane['id']}").status_code == 200
    assert api.delete(f"{path}/{jane['id']}").status_code == 404


def test_reset_with_seed_loads_sample_data(api):
    resp = api.post("/api/admin/reset", params={"seed": "true"})
    assert resp.json()["data"] == {"seeded": True}

    stats = api.get("/api/dashboard").json()["data"]
    assert stats == {
        "projects": {"total_projects": 3, "active_projects": 2},
        "tasks": {"total_tasks": 4, "completed_tasks": 1},
        "assignees": {"total_assignees": 3},
    }