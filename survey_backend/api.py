"""
FastAPI app entry point aggregating per-domain routers under survey_backend/routes.
Keep as `uvicorn survey_backend.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .security import SessionStore
from .services.bootstrap_svc import init_db

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errs = exc.errors()
    if not errs:
        return "invalid request"
    first = errs[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def create_app() -> FastAPI:
    """Build the app from the current environment / config.yaml.

    The DB path is not captured here: get_conn() resolves it on every call.
    """
    settings = get_settings()

    app = FastAPI(title="survey-backend", version="0.1.0")
    app.state.sessions = SessionStore(ttl_seconds=settings.session_ttl_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # 统一错误体：{"error": "..."}
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _validation_message(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)

    @app.on_event("startup")
    def on_startup():
        # 启动失败直接抛出，进程退出
        boot = get_settings()
        init_db(boot)
        logger.info("survey-backend ready, db=%s", boot.db_path)

    # Include routers (split by business domain)
    from .routes import base as base_routes
    from .routes import admin as admin_routes
    from .routes import questions as questions_routes
    from .routes import responses as responses_routes
    from .routes import analytics as analytics_routes
    from .routes import logs as logs_routes

    app.include_router(base_routes.router)
    app.include_router(admin_routes.router)
    app.include_router(questions_routes.router)
    app.include_router(responses_routes.router)
    app.include_router(analytics_routes.router)
    app.include_router(logs_routes.router)

    return app


app = create_app()
