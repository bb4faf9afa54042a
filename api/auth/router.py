"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.db import Database, get_db
from core.responses import ok

from . import dependencies, schemas, service

router = APIRouter(prefix="/api/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest, db: Database = Depends(get_db)) -> dict:
    result = await service.register(db, payload)
    return ok(result.model_dump(), "User registered successfully")


@router.post("/login")
async def login(payload: schemas.LoginRequest, db: Database = Depends(get_db)) -> dict:
    result = await service.login(db, payload)
    return ok(result.model_dump())


@router.get("/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> dict:
    return ok(service.me(current_user).model_dump())
