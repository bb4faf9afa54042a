"""
Auth persistence helpers.
"""

from __future__ import annotations

from core.db import Database


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(db: Database, *, email: str, password_hash: str, is_active: bool = True) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (email, password_hash, is_active)
        VALUES ($1, $2, $3)
        RETURNING id, email, is_active, created_at, updated_at
        """,
        normalize_email(email),
        password_hash,
        is_active,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_email(db: Database, email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, email, password_hash, is_active, created_at, updated_at
        FROM users
        WHERE email = $1
        """,
        normalize_email(email),
    )


async def get_user_by_id(db: Database, user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, email, password_hash, is_active, created_at, updated_at
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
