import pytest
from fastapi.testclient import TestClient

from auth import repository as auth_repository
from auth import security
from conftest import NOW
from core.db import get_db
from main import create_app
from tasks import repository as task_repository

USER = {
    "id": 5,
    "email": "dev@example.com",
    "password_hash": "",
    "is_active": True,
    "created_at": NOW,
    "updated_at": NOW,
}


@pytest.fixture
def users(monkeypatch):
    stored = {}

    async def get_by_email(db, email):
        return stored.get(auth_repository.normalize_email(email))

    async def get_by_id(db, user_id):
        return next((row for row in stored.values() if row["id"] == user_id), None)

    async def create_user(db, *, email, password_hash, is_active=True):
        row = {**USER, "email": email, "password_hash": password_hash, "is_active": is_active}
        stored[email] = row
        return row

    monkeypatch.setattr(auth_repository, "get_user_by_email", get_by_email)
    monkeypatch.setattr(auth_repository, "get_user_by_id", get_by_id)
    monkeypatch.setattr(auth_repository, "create_user", create_user)
    return stored


def test_password_hash_round_trip():
    hashed = security.hash_password("correct horse")
    assert security.verify_password("correct horse", hashed)
    assert not security.verify_password("wrong horse", hashed)
    assert not security.verify_password("anything", "not-a-bcrypt-hash")


def test_tampered_token_is_rejected():
    token = security.build_access_token(user_id=1, email="a@b.c")
    with pytest.raises(security.AuthSecurityError):
        security.decode_access_token(token + "x")


def test_register_login_me(client, users):
    resp = client.post("/api/auth/register", json={"email": "Dev@Example.com", "password": "s3cret-pass"})
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["user"]["email"] == "dev@example.com"
    assert data["tokens"]["token_type"] == "bearer"

    again = client.post("/api/auth/register", json={"email": "dev@example.com", "password": "s3cret-pass"})
    assert again.status_code == 409

    bad = client.post("/api/auth/login", json={"email": "dev@example.com", "password": "nope"})
    assert bad.status_code == 401

    login = client.post("/api/auth/login", json={"email": "dev@example.com", "password": "s3cret-pass"})
    assert login.status_code == 200
    token = login.json()["data"]["tokens"]["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == 5


def test_me_without_token_is_401(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "Missing Authorization header."}


def test_resource_routes_require_token_when_enabled(fake_db, users, monkeypatch):
    monkeypatch.setenv("AUTH_REQUIRED", "true")
    app = create_app()
    app.dependency_overrides[get_db] = lambda: fake_db
    client = TestClient(app)

    async def fake_list(db, **filters):
        return []

    monkeypatch.setattr(task_repository, "list_tasks", fake_list)
    assert client.get("/api/tasks").status_code == 401
    assert client.get("/api/tasks", headers={"Authorization": "Token abc"}).status_code == 401

    users["dev@example.com"] = {**USER}
    token = security.build_access_token(user_id=5, email="dev@example.com")
    resp = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": []}


def test_register_rejects_passwords_longer_than_72_bytes(client, monkeypatch):
    def fail(password):
        raise AssertionError("hashing must not be reached")

    monkeypatch.setattr(security, "hash_password", fail)
    # 40 characters, 80 bytes in UTF-8.
    resp = client.post("/api/auth/register", json={"email": "a@b.co", "password": "é" * 40})
    assert resp.status_code == 400
    assert resp.json()["message"] == "password: password must be at most 72 bytes"


def test_multibyte_password_within_72_bytes_registers(client, users):
    resp = client.post("/api/auth/register", json={"email": "a@b.co", "password": "é" * 36})
    assert resp.status_code == 201
