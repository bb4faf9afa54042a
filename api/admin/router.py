"""
Admin endpoints: destructive schema maintenance.

Only mounted when ADMIN_ROUTES_ENABLED is on (see `api/main.py`).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from core import schema
from core.db import Database, get_db
from core.responses import ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin")


@router.post("/cleanup")
async def cleanup(db: Database = Depends(get_db)) -> dict:
    await schema.drop_schema(db)
    logger.warning("admin_cleanup")
    return ok(message="Database cleanup completed; all tables were dropped")


@router.post("/reset")
async def reset(
    seed: bool = Query(default=True),
    db: Database = Depends(get_db),
) -> dict:
    # DDL is transactional in Postgres, so a failed rebuild leaves the old tables.
    async with db.transaction() as tx:
        await schema.drop_schema(tx)
        await schema.create_schema(tx)
        seeded = await schema.seed_sample_data(tx) if seed else False
    logger.warning("admin_reset seeded=%s", seeded)
    return ok({"seeded": seeded}, "Database reset completed successfully")
