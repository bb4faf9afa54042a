"""
Dashboard API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db
from core.responses import ok

from . import service

router = APIRouter(prefix="/api/dashboard")


@router.get("")
@router.get("/stats")
async def dashboard(db: Database = Depends(get_db)) -> dict:
    return ok(await service.stats(db))
