import pytest

from core import config
from core.db import database_url


def test_env_bool_parsing(monkeypatch):
    monkeypatch.setenv("AUTH_REQUIRED", "yes")
    assert config.auth_required() is True
    monkeypatch.setenv("AUTH_REQUIRED", "off")
    assert config.auth_required() is False
    monkeypatch.setenv("AUTH_REQUIRED", "maybe")
    assert config.auth_required() is False


def test_env_int_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("API_PORT", "eighty")
    assert config.api_port() == 8080
    monkeypatch.setenv("API_PORT", "9000")
    assert config.api_port() == 9000


def test_pool_max_is_never_below_min(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "4")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "2")
    assert config.db_pool_max_size() == 4


def test_cors_origins(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test ,")
    assert config.cors_origins() == ["http://a.test", "http://b.test"]
    monkeypatch.setenv("CORS_ORIGINS", "*")
    assert config.cors_origins() == ["*"]


def test_database_url_strips_sslmode(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/app?sslmode=disable&application_name=pm")
    assert database_url() == "postgresql://u:p@db:5432/app?application_name=pm"


def test_database_url_is_required(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(RuntimeError):
        database_url()
