from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin import router as admin_router
from assignees import router as assignees_router
from auth import dependencies as auth_dependencies
from auth import router as auth_router
from core import config, schema
from core.db import Database
from core.errors import StoreError
from core.log import configure_logging
from core.responses import failure
from dashboard import router as dashboard_router
from memberships import router as memberships_router
from projects import router as projects_router
from tasks import router as tasks_router

logger = logging.getLogger(__name__)

_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, handed to routes through core.db.get_db.
    db = await Database.connect()
    app.state.db = db
    try:
        if config.init_schema_on_startup():
            await schema.create_schema(db)
        if config.seed_on_startup():
            await schema.seed_sample_data(db)
        logger.info(
            "startup admin_routes=%s auth_required=%s",
            config.admin_routes_enabled(),
            config.auth_required(),
        )
        yield
    finally:
        app.state.db = None
        await db.close()
        logger.info("shutdown db_closed=true")


def describe_validation_error(error: dict[str, Any]) -> str:
    """
    Render one pydantic error as a short sentence, e.g. "title is required".
    """
    kind = str(error.get("type") or "")
    if kind == "json_invalid":
        return "Request body is not valid JSON"

    # Integer loc parts are list indexes or JSON offsets, not field names.
    field = ".".join(
        str(part)
        for part in error.get("loc", ())
        if part not in _LOCATION_ROOTS and not isinstance(part, int)
    )
    message = str(error.get("msg") or "Invalid value")
    message = message.removeprefix("Value error, ")

    if kind == "missing":
        return f"{field or 'Request body'} is required"
    if kind == "extra_forbidden":
        return f"{field} is not allowed"
    if not field:
        return message
    return f"{field}: {message}"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=failure(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        messages = [describe_validation_error(error) for error in exc.errors()]
        return JSONResponse(
            status_code=400,
            content=failure(messages[0] if messages else "Invalid request.", errors=messages),
        )

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("store_failure path=%s error=%s", request.url.path, exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content=failure(exc.message))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content=failure("Internal server error."))


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Project Manager API", lifespan=lifespan)

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    guarded = [Depends(auth_dependencies.require_user_when_enabled)]
    app.include_router(assignees_router.router, tags=["assignees"], dependencies=guarded)
    app.include_router(projects_router.router, tags=["projects"], dependencies=guarded)
    app.include_router(tasks_router.router, tags=["tasks"], dependencies=guarded)
    app.include_router(memberships_router.router, tags=["memberships"], dependencies=guarded)
    app.include_router(dashboard_router.router, tags=["dashboard"], dependencies=guarded)
    app.include_router(auth_router.router, tags=["auth"])
    if config.admin_routes_enabled():
        app.include_router(admin_router.router, tags=["admin"], dependencies=guarded)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "project manager api"}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=config.api_host(), port=config.api_port())


if __name__ == "__main__":
    run()
