from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from interviewiq.db.base import Base


def build_engine(url: str) -> AsyncEngine:
    """Create the async engine for ``url``.

    In-memory SQLite must share a single connection, otherwise every
    checkout sees an empty database.

    Args:
        url: SQLAlchemy async DB URL.

    Returns:
        AsyncEngine: configured engine.
    """
    if url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url):
        return create_async_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(url, echo=False, pool_pre_ping=True)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    from interviewiq import models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide a request-scoped DB session.

    Yields:
        AsyncSession: async SQLAlchemy session.
    """
    async with request.app.state.sessionmaker() as session:
        yield session
