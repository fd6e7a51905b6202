"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (metadata, middleware, routers, handlers)
  - Validate token configuration at startup (ConfigurationError is fatal)
  - Initialize/close the PostgreSQL pool when STORE_BACKEND=postgres
  - Expose /healthz

Collaborators:
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: /v1 auth + attendance endpoints
  - container: token issuer/verifier and stores

Notes:
  - Middleware order matters: RequestContext -> CORS -> routes
  - Run with: uvicorn staffatt.api.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import (
    get_credential_store,
    get_session_store,
    get_token_issuer,
    get_token_verifier,
)
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.exceptions import ConfigurationError, DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates token settings and initializes pool."""
    settings = get_settings()

    try:
        get_token_issuer()
        get_token_verifier()
    except ConfigurationError as exc:
        logger.critical("Startup aborted: invalid configuration", extra={"error": exc.message})
        raise

    uses_pool = settings.store_backend == "postgres" and not _is_test_env(settings)
    if uses_pool:
        init_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout_seconds=settings.db_pool_timeout_seconds,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        ensure_dev_admin(settings, credentials=get_credential_store())

        logger.info(
            "Staff attendance API starting up",
            extra={
                "app_env": settings.app_env,
                "store_backend": settings.store_backend,
                "token_ttl_minutes": settings.jwt_access_ttl_minutes,
            },
        )
        yield
    finally:
        if uses_pool:
            close_pool()
        logger.info("Staff attendance API shutting down")


def _is_test_env(settings: Settings) -> bool:
    return settings.app_env.strip().lower() in {"test", "testing", "ci"}


def create_app() -> FastAPI:
    settings = get_settings()

    fastapi_app = FastAPI(
        title="Staff Attendance API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Kiosk and admin authentication (JWT)"},
            {"name": "attendance", "description": "Check-in / check-out sessions"},
        ],
    )

    fastapi_app.add_middleware(RequestContextMiddleware)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
    )

    fastapi_app.include_router(router, prefix="/v1")
    register_exception_handlers(fastapi_app)

    @fastapi_app.get("/healthz")
    def healthz(request: Request):
        """Liveness + store ping."""
        store_status = "disconnected"
        try:
            if get_session_store().ping():
                store_status = "connected"
        except DatabaseError as exc:
            logger.warning("Health check: store unavailable", extra={"error_id": exc.error_id})

        return {
            "ok": store_status == "connected",
            "store": store_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return fastapi_app


app = create_app()
