"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from stormforge.config import Settings, get_settings
from stormforge.infrastructure.database import close_db, create_tables, get_engine, init_db
from stormforge.infrastructure.middleware import (
    RateLimiter,
    RateLimitMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
    error_handler_middleware,
)
from stormforge.infrastructure.telemetry import configure_logging, get_logger, set_service_info
from stormforge.infrastructure.telemetry.tracing import (
    configure_tracing,
    instrument_fastapi,
    instrument_sqlalchemy,
    shutdown_tracing,
)
from stormforge.presentation.http import api_router, users_router

logger = get_logger(__name__)

API_TITLE = "StormForge API"
API_DESCRIPTION = "Production-ready REST API framework"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings

    # Startup
    logger.info(
        "Starting StormForge API",
        extra={
            "version": settings.version,
            "environment": settings.environment,
        },
    )

    await init_db(settings)
    logger.info("Database connection initialized")

    if settings.db_create_all:
        await create_tables()
        logger.info("Database tables ensured")

    if settings.otel_enabled:
        instrument_sqlalchemy(get_engine())

    logger.info(
        f"StormForge running on {settings.public_url}",
        extra={"docs_url": f"{settings.public_url}/docs"},
    )

    yield

    # Shutdown
    logger.info("Shutting down StormForge API")
    await close_db()
    if settings.otel_enabled:
        shutdown_tracing()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override for testing

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    configure_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        service_name=settings.otel_service_name,
    )

    set_service_info(
        version=settings.version,
        environment=settings.environment,
    )

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs",
        openapi_url="/docs/json",
        redoc_url=None,
        servers=[{"url": settings.public_url}] if settings.domain else None,
    )
    app.state.settings = settings

    if settings.otel_enabled:
        configure_tracing(
            service_name=settings.otel_service_name,
            service_version=settings.version,
            environment=settings.environment,
            otlp_endpoint=settings.otlp_endpoint or None,
        )
        instrument_fastapi(app)

    # Add middleware (order matters - last added is first executed)
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
    if settings.rate_limit_enabled:
        app.state.rate_limiter = RateLimiter(
            max_requests=settings.rate_limit_max,
            window_seconds=settings.rate_limit_window_seconds,
        )
        app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestContextMiddleware)

    # Register error handlers
    error_handler_middleware(app)

    # Include API routes
    app.include_router(api_router)
    app.include_router(users_router, prefix=settings.api_prefix, tags=["Users"])

    return app


def run() -> None:
    """Serve the application with uvicorn using configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "stormforge.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
