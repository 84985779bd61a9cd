from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from interviewiq.common.time import as_utc, utc_now
from interviewiq.core.config import Settings
from interviewiq.core.exceptions import AuthenticationError
from interviewiq.db.session import get_db
from interviewiq.models.auth_token import AuthToken
from interviewiq.models.user import User
from interviewiq.providers.llm import LLMClient
from interviewiq.providers.speech import SpeechProvider
from interviewiq.repositories.interview_repository import InterviewRepository
from interviewiq.services.feedback_service import FeedbackService
from interviewiq.services.interview_service import InterviewService
from interviewiq.services.question_service import QuestionService
from interviewiq.services.speech_service import SpeechService

bearer: HTTPBearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client


def get_speech_provider(request: Request) -> SpeechProvider:
    return request.app.state.speech_provider


async def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the caller from a bearer token.

    Args:
        cred: token parsed from the Authorization header.
        db: DB session.

    Returns:
        User: authenticated user.

    Raises:
        AuthenticationError: missing, unknown or expired token, or the user is gone.
    """
    if cred is None:
        raise AuthenticationError("Not authorized, no token")

    res = await db.execute(select(AuthToken).where(AuthToken.token == cred.credentials))
    t: AuthToken | None = res.scalar_one_or_none()

    if t is None or as_utc(t.expires_at) < utc_now():
        raise AuthenticationError("Not authorized, token failed")

    user: User | None = await db.get(User, t.user_id)
    if user is None:
        raise AuthenticationError("Not authorized, user not found")

    return user


def get_interview_service(db: AsyncSession = Depends(get_db)) -> InterviewService:
    return InterviewService(InterviewRepository(db))


def get_question_service(
    llm: LLMClient = Depends(get_llm_client),
    interviews: InterviewService = Depends(get_interview_service),
) -> QuestionService:
    return QuestionService(llm, interviews)


def get_feedback_service(
    llm: LLMClient = Depends(get_llm_client),
    interviews: InterviewService = Depends(get_interview_service),
) -> FeedbackService:
    return FeedbackService(llm, interviews)


def get_speech_service(
    provider: SpeechProvider = Depends(get_speech_provider),
    interviews: InterviewService = Depends(get_interview_service),
) -> SpeechService:
    return SpeechService(provider, interviews)
