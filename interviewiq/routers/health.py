from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from interviewiq.core.exceptions import ServiceUnavailableError
from interviewiq.db.session import get_db

router: APIRouter = APIRouter()
logger = logging.getLogger("interviewiq.health")


class HealthOut(BaseModel):
    """Health check response."""
    ok: bool


@router.get("/health", response_model=HealthOut)
async def health() -> HealthOut:
    """Liveness check.

    Returns:
        HealthOut: {"ok": True}
    """
    return HealthOut(ok=True)


@router.get("/health/db", response_model=HealthOut)
async def health_db(db: AsyncSession = Depends(get_db)) -> HealthOut:
    """Database connectivity check (``SELECT 1``).

    Raises:
        ServiceUnavailableError: the database did not answer.
    """
    try:
        await db.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error(f"DB health check failed: {exc}")
        raise ServiceUnavailableError("Database unavailable") from exc
    return HealthOut(ok=True)
