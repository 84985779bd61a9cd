from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from interviewiq.models.interview import InterviewSession

logger = logging.getLogger("interviewiq.repositories.interview")


class InterviewRepository:
    """Session store over an async SQLAlchemy session.

    Every write touches exactly one row by id and commits immediately.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, **fields: Any) -> InterviewSession:
        interview = InterviewSession(**fields)
        self.db.add(interview)
        await self.db.commit()
        await self.db.refresh(interview)
        return interview

    async def get(self, interview_id: str) -> InterviewSession | None:
        return await self.db.get(InterviewSession, interview_id)

    async def list_by_owner(self, owner_id: int) -> list[InterviewSession]:
        """Owner's sessions, newest first."""
        res = await self.db.execute(
            select(InterviewSession)
            .where(InterviewSession.owner_id == owner_id)
            .order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc())
        )
        return list(res.scalars().all())

    async def update(self, interview: InterviewSession, changes: dict[str, Any]) -> InterviewSession:
        """Apply ``changes`` (column name -> value) in a single commit."""
        for field, value in changes.items():
            setattr(interview, field, value)
        await self.db.commit()
        await self.db.refresh(interview)
        logger.debug(f"Interview {interview.id} updated: {sorted(changes)}")
        return interview

    async def delete(self, interview: InterviewSession) -> None:
        await self.db.delete(interview)
        await self.db.commit()
