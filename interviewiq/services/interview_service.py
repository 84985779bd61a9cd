from __future__ import annotations

import logging
from typing import Any

import pydantic

from interviewiq.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from interviewiq.models.interview import Difficulty, InterviewSession
from interviewiq.models.user import User
from interviewiq.repositories.interview_repository import InterviewRepository
from interviewiq.schemas.feedback import FeedbackRecord, coerce_feedback
from interviewiq.schemas.interview import InterviewCreateIn, InterviewUpdateIn

logger = logging.getLogger("interviewiq.services.interview")

ROLE_MAX_LENGTH = 200
DIFFICULTY_MESSAGE = "Difficulty must be easy, medium, or hard"


def normalize_role(role: str | None) -> str:
    """Trim and bound-check a role name.

    Raises:
        ValidationError: blank or longer than 200 characters.
    """
    value = (role or "").strip()
    if not value:
        raise ValidationError("Role is required")
    if len(value) > ROLE_MAX_LENGTH:
        raise ValidationError(f"Role cannot exceed {ROLE_MAX_LENGTH} characters")
    return value


def parse_difficulty(value: str | None) -> Difficulty:
    """Map a submitted difficulty onto the enum.

    Raises:
        ValidationError: anything outside easy/medium/hard.
    """
    try:
        return Difficulty(value)
    except ValueError as exc:
        raise ValidationError(DIFFICULTY_MESSAGE) from exc


def feedback_column(value: Any) -> dict[str, Any] | None:
    """Stored form of submitted feedback: a record dict, or None when absent."""
    try:
        record = coerce_feedback(value)
    except pydantic.ValidationError as exc:
        raise ValidationError("Feedback must be text or a feedback object") from exc
    return record.model_dump() if record is not None else None


class InterviewService:
    """Owner-scoped CRUD over interview sessions."""

    def __init__(self, repository: InterviewRepository) -> None:
        self.repository = repository

    async def create(self, owner: User, payload: InterviewCreateIn) -> InterviewSession:
        """Create a session owned by ``owner``.

        Args:
            owner: authenticated caller; always becomes the owner.
            payload: role and difficulty plus optional initial content.

        Returns:
            InterviewSession: the stored session.

        Raises:
            ValidationError: missing role/difficulty or constraint violation.
        """
        if not payload.role or not payload.difficulty:
            raise ValidationError("Please provide role and difficulty")

        interview = await self.repository.create(
            owner_id=owner.id,
            role=normalize_role(payload.role),
            difficulty=parse_difficulty(payload.difficulty),
            question=payload.question or "",
            user_answer=payload.user_answer or "",
            feedback=feedback_column(payload.feedback),
            audio_url=payload.audio_url or "",
        )
        logger.info(f"Interview created: {interview.id} for user: {owner.id}")
        return interview

    async def list_for(self, owner: User) -> list[InterviewSession]:
        return await self.repository.list_by_owner(owner.id)

    async def get_owned(self, caller: User, interview_id: str, action: str = "access") -> InterviewSession:
        """Fetch a session the caller owns.

        Existence is checked first, then ownership.

        Args:
            caller: authenticated caller.
            interview_id: session id.
            action: verb used in the refusal message.

        Returns:
            InterviewSession: the session.

        Raises:
            NotFoundError: no such session.
            PermissionDeniedError: session belongs to someone else.
        """
        interview = await self.repository.get(interview_id)
        if interview is None:
            raise NotFoundError("Interview session not found")
        if interview.owner_id != caller.id:
            logger.warning(f"User {caller.id} tried to {action} interview {interview_id}")
            raise PermissionDeniedError(f"Not authorized to {action} this interview session")
        return interview

    async def find_owned(self, caller: User, interview_id: str | None) -> InterviewSession | None:
        """Lenient lookup for AI side effects: unknown or foreign ids yield None."""
        if not interview_id:
            return None
        interview = await self.repository.get(interview_id)
        if interview is None or interview.owner_id != caller.id:
            logger.info(f"Skipping write to interview {interview_id}: not found or not owned by {caller.id}")
            return None
        return interview

    async def update(self, caller: User, interview_id: str, payload: InterviewUpdateIn) -> InterviewSession:
        """Apply whitelisted fields to an owned session."""
        interview = await self.get_owned(caller, interview_id, action="update")

        changes: dict[str, Any] = {}
        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "role":
                changes["role"] = normalize_role(value)
            elif field == "difficulty":
                changes["difficulty"] = parse_difficulty(value)
            elif field == "feedback":
                changes["feedback"] = feedback_column(value)
            else:
                changes[field] = value or ""

        if not changes:
            return interview

        interview = await self.repository.update(interview, changes)
        logger.info(f"Interview updated: {interview.id} fields={sorted(changes)}")
        return interview

    async def delete(self, caller: User, interview_id: str) -> None:
        interview = await self.get_owned(caller, interview_id, action="delete")
        await self.repository.delete(interview)
        logger.info(f"Interview deleted: {interview_id}")

    # --- AI side effects -------------------------------------------------

    async def record_question(self, interview: InterviewSession, question: str, reset_answer: bool = False) -> None:
        changes: dict[str, Any] = {"question": question}
        if reset_answer:
            changes.update(user_answer="", feedback=None, audio_url="")
        await self.repository.update(interview, changes)

    async def record_feedback(self, interview: InterviewSession, user_answer: str, feedback: FeedbackRecord) -> None:
        # answer and feedback always land in the same commit
        await self.repository.update(interview, {"user_answer": user_answer, "feedback": feedback.model_dump()})

    async def record_audio(self, interview: InterviewSession, marker: str) -> None:
        await self.repository.update(interview, {"audio_url": marker})
