from __future__ import annotations

from pydantic import AliasChoices, Field

from interviewiq.schemas.common import CamelModel
from interviewiq.schemas.feedback import FeedbackRecord

_SESSION_ID = AliasChoices("sessionId", "interviewId", "session_id")


class GenerateQuestionIn(CamelModel):
    role: str | None = None
    difficulty: str | None = None
    session_id: str | None = Field(default=None, validation_alias=_SESSION_ID)
    # also clear userAnswer/feedback/audioUrl when writing the new question
    reset_answer: bool = False


class GenerateQuestionOut(CamelModel):
    question: str
    role: str
    difficulty: str
    session_id: str | None = None


class AnalyzeAnswerIn(CamelModel):
    question: str | None = None
    user_answer: str | None = None
    session_id: str | None = Field(default=None, validation_alias=_SESSION_ID)


class AnalyzeAnswerOut(CamelModel):
    feedback: FeedbackRecord
    question: str
    session_id: str | None = None


class GenerateAudioIn(CamelModel):
    text: str | None = None
    session_id: str | None = Field(default=None, validation_alias=_SESSION_ID)


class GenerateAudioOut(CamelModel):
    audio_url: str
    session_id: str | None = None
