"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.errors import register_exception_handlers
from storefront.api.routes import include_api_routes
from storefront.config import settings
from storefront.db.session import create_schema, dispose_engine, get_engine
from storefront.services.queue.notification_queue import close_redis_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    if settings.is_production:
        # schema is managed by migrations outside the service in production
        logger.info("Skipping schema creation in production mode")
    else:
        try:
            await create_schema(get_engine())
        except Exception:
            logger.exception("Failed creating database schema on startup")

    if not settings.auth_configured:
        logger.warning("JWT_SECRET is not set, every protected route will answer 401")

    yield

    await close_redis_client()
    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Storefront",
        description="Catalog, opinions, questions and checkout for the storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    register_exception_handlers(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
