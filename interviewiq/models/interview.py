from __future__ import annotations

import enum
import secrets
import threading
import time
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from interviewiq.common.time import utc_now
from interviewiq.db.base import Base


class Difficulty(str, enum.Enum):
    """Interview difficulty."""
    easy = "easy"
    medium = "medium"
    hard = "hard"


_id_lock = threading.Lock()
_last_stamp = 0


def new_session_id() -> str:
    """32-hex id: a strictly increasing nanosecond stamp followed by 8 random bytes.

    Ids sort in creation order, so they break ties between equal ``created_at`` values.
    """
    global _last_stamp
    with _id_lock:
        _last_stamp = max(time.time_ns(), _last_stamp + 1)
        stamp = _last_stamp
    return f"{stamp:016x}{secrets.token_hex(8)}"


class InterviewSession(Base):
    """One mock-interview session owned by a single user."""

    __tablename__ = "interview_sessions"
    __table_args__ = (Index("ix_interview_sessions_owner_created", "owner_id", "created_at"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_session_id)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role: Mapped[str] = mapped_column(String(200), nullable=False)
    difficulty: Mapped[Difficulty] = mapped_column(Enum(Difficulty), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_answer: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # FeedbackRecord as a dict, or NULL when absent
    feedback: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True, default=None)
    audio_url: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )
