"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance and wires:
- lifespan: schema bootstrap (development/testing), cleanup job start/stop,
  database pool disposal
- middleware: CORS, rate limiting, request tracing
- RFC 7807 exception handlers
- system routes (/, /health) and the versioned API (/api/v1)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.container import get_cleanup_job, get_database, get_logger
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
)
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: create tables outside production (migrations own production
      schema), start the cleanup job
    - Shutdown: stop the cleanup job, close database connections

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    database = get_database()

    if not settings.is_production:
        await database.create_all()

    cleanup_job = get_cleanup_job()
    cleanup_job.start()
    logger.info(
        "Application started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await cleanup_job.stop()
    await database.close()
    logger.info("Application stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Community platform accounts, verification and notifications",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware runs in reverse order of registration: CORS -> trace -> rate limit
app.add_middleware(RateLimitMiddleware)
app.add_middleware(TraceMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[
        "X-Trace-Id",
        "X-RateLimit-Limit",
        "X-RateLimit-Remaining",
        "X-RateLimit-Reset",
        "Retry-After",
    ],
)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

# Non-versioned system routes and API v1 routers
app.include_router(system_router)
app.include_router(v1_router)
