"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from storefront.config import settings
from storefront.db.session import SessionDependency, ping

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(session: SessionDependency) -> dict[str, str]:
    """Health check endpoint with database connectivity check."""

    database_status = "connected" if await ping(session) else "disconnected"

    return {
        "status": "healthy",
        "database": database_status,
        "environment": settings.ENVIRONMENT,
    }
