"""
Async database access helpers (raw SQL) using asyncpg.

`Database` wraps either the connection pool or a single connection inside a
transaction, so repository functions take one handle type and do not care
which one they got. The pool-backed handle is created in the FastAPI
lifespan (see `api/main.py`), stored on `app.state.db` and handed to routes
through `get_db`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from . import config
from .errors import StoreError, StoreUnavailableError, translate_error


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, executor: Any, *, bound: bool = False) -> None:
        # executor is an asyncpg.Pool, or a pooled connection when bound=True.
        self._executor = executor
        self._bound = bound

    @classmethod
    async def connect(cls, dsn: str | None = None) -> Database:
        try:
            pool = await asyncpg.create_pool(
                dsn=dsn or database_url(),
                min_size=config.db_pool_min_size(),
                max_size=config.db_pool_max_size(),
                command_timeout=config.db_command_timeout_s(),
            )
        except (OSError, asyncpg.InterfaceError) as exc:
            raise StoreUnavailableError("Database is unavailable.") from exc
        except asyncpg.PostgresError as exc:
            raise translate_error(exc) from exc
        return cls(pool)

    @property
    def in_transaction(self) -> bool:
        return self._bound

    async def close(self) -> None:
        if not self._bound:
            await self._executor.close()

    @asynccontextmanager
    async def _guard(self) -> AsyncIterator[None]:
        try:
            yield
        except StoreError:
            raise
        except asyncpg.PostgresError as exc:
            raise translate_error(exc) from exc
        except (OSError, asyncpg.InterfaceError) as exc:
            raise StoreUnavailableError("Database is unavailable.") from exc

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Database]:
        """
        Yield a handle bound to one connection inside a transaction.

        Nested calls open a savepoint on the same connection.
        """
        async with self._guard():
            if self._bound:
                async with self._executor.transaction():
                    yield self
                return

            async with self._executor.acquire() as conn:  # type: asyncpg.Connection
                async with conn.transaction():
                    yield Database(conn, bound=True)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self._guard():
            row = await self._executor.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self._guard():
            rows = await self._executor.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def fetch_value(self, sql: str, *args: Any) -> Any:
        async with self._guard():
            return await self._executor.fetchval(sql, *args)

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the status tag.
        """
        async with self._guard():
            return await self._executor.execute(sql, *args)


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise StoreUnavailableError("Database is not initialized.")
    return db
