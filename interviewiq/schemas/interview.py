from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import ConfigDict, computed_field, field_validator

from interviewiq.models.interview import Difficulty
from interviewiq.schemas.common import CamelModel
from interviewiq.schemas.feedback import FeedbackRecord, coerce_feedback

SessionStatus = Literal["not_started", "in_progress", "completed"]


class InterviewCreateIn(CamelModel):
    """Create payload. Ownership always comes from the caller, never the body."""
    role: str | None = None
    difficulty: str | None = None
    question: str | None = None
    user_answer: str | None = None
    feedback: str | dict[str, Any] | None = None
    audio_url: str | None = None


class InterviewUpdateIn(CamelModel):
    """Whitelisted update fields. Anything else in the body is ignored."""
    role: str | None = None
    difficulty: str | None = None
    question: str | None = None
    user_answer: str | None = None
    feedback: str | dict[str, Any] | None = None
    audio_url: str | None = None


class InterviewOut(CamelModel):
    """Serialized interview session."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: int
    role: str
    difficulty: Difficulty
    question: str = ""
    user_answer: str = ""
    feedback: FeedbackRecord | None = None
    audio_url: str = ""
    created_at: datetime
    updated_at: datetime

    @field_validator("feedback", mode="before")
    @classmethod
    def _normalize_feedback(cls, value: Any) -> FeedbackRecord | None:
        return coerce_feedback(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> SessionStatus:
        """Derived progress; never stored."""
        if self.feedback is not None:
            return "completed"
        if self.question:
            return "in_progress"
        return "not_started"
