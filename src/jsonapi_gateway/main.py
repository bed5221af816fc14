"""FastAPI application entry point."""

from contextlib import asynccontextmanager
import os
from typing import AsyncGenerator, Awaitable, Callable, cast

from fastapi import APIRouter, FastAPI, Request
from starlette.exceptions import HTTPException
from starlette.responses import Response
import structlog

from .api.routes import jsonapi_router
from .config import Settings, get_settings
from .core.errors import (
    AppError,
    RequestTooLargeError,
    ValidationError,
    app_error_handler,
    http_exception_handler,
    jsonapi_error_response,
)
from .db.postgres import PostgresDocumentEngine
from .gateway import GatewayAdapter

logger = structlog.get_logger(__name__)


def _should_skip_pool() -> bool:
    return os.getenv("SKIP_DB_POOL") == "1"


def build_engine(settings: Settings) -> PostgresDocumentEngine:
    """Create the PostgreSQL document engine from settings."""
    return PostgresDocumentEngine(
        settings.database_url,
        function_name=settings.jsonapi_function,
        user_id=settings.jsonapi_user_id,
        company_id=settings.jsonapi_company_id,
        min_size=settings.db_pool_min,
        max_size=settings.db_pool_max,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Opens the engine's connection pool on startup and closes it on shutdown.
    A failed connection is logged, not fatal: requests then receive the
    500 fault document until the database is reachable at next start.
    """
    settings = get_settings()
    app.state.settings = settings

    engine = build_engine(settings)
    if not _should_skip_pool():
        try:
            await engine.connect()
        except Exception as e:
            logger.warning("database_connection_failed", error=str(e))
    app.state.engine = engine
    app.state.gateway = GatewayAdapter(engine)

    yield

    await engine.disconnect()
    logger.info("database_connections_closed")


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title="JSON:API Gateway",
        version="0.1.0",
        description="HTTP gateway in front of a database-resident JSON:API engine",
        lifespan=lifespan,
    )
    install_middleware(app)

    app.add_exception_handler(
        AppError,
        cast(Callable[[Request, Exception], Awaitable[Response]], app_error_handler),
    )
    app.add_exception_handler(
        HTTPException,
        cast(Callable[[Request, Exception], Awaitable[Response]], http_exception_handler),
    )

    # Health first: the JSON:API router matches every path
    app.include_router(router)
    app.include_router(jsonapi_router)

    return app


router = APIRouter()


def install_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def enforce_request_size(request: Request, call_next):
        settings = request.app.state.settings
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                too_large = int(content_length) > settings.request_max_bytes
            except ValueError:
                error: AppError = ValidationError("Invalid content-length header")
                return jsonapi_error_response(error.status, error.to_document(str(request.url)))
            if too_large:
                error = RequestTooLargeError(settings.request_max_bytes)
                return jsonapi_error_response(error.status, error.to_document(str(request.url)))
        return await call_next(request)


@router.get("/health")
def health_check(request: Request) -> dict:
    """Health check endpoint."""
    engine = getattr(request.app.state, "engine", None)
    connected = bool(engine is not None and engine.is_connected)
    return {"status": "ok", "engine": "connected" if connected else "disconnected"}


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("jsonapi_gateway.main:app", host=settings.backend_host, port=settings.backend_port)


app = create_app()
