from __future__ import annotations

from fastapi import APIRouter, Depends

from interviewiq.core.deps import get_current_user, get_feedback_service, get_question_service, get_speech_service
from interviewiq.models.user import User
from interviewiq.schemas.ai import (
    AnalyzeAnswerIn,
    AnalyzeAnswerOut,
    GenerateAudioIn,
    GenerateAudioOut,
    GenerateQuestionIn,
    GenerateQuestionOut,
)
from interviewiq.schemas.common import ApiResponse
from interviewiq.services.feedback_service import FeedbackService
from interviewiq.services.question_service import QuestionService
from interviewiq.services.speech_service import SpeechService

router: APIRouter = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("/generate-question", response_model=ApiResponse[GenerateQuestionOut])
async def generate_question(
    payload: GenerateQuestionIn,
    user: User = Depends(get_current_user),
    service: QuestionService = Depends(get_question_service),
) -> ApiResponse[GenerateQuestionOut]:
    """Generate one interview question for a role/difficulty.

    Raises:
        ValidationError: missing role/difficulty or unknown difficulty (400).
        ServiceUnavailableError: AI provider out of quota or throttled (503).
    """
    result = await service.generate(
        user,
        payload.role,
        payload.difficulty,
        session_id=payload.session_id,
        reset_answer=payload.reset_answer,
    )
    return ApiResponse(data=result)


@router.post("/analyze-answer", response_model=ApiResponse[AnalyzeAnswerOut])
async def analyze_answer(
    payload: AnalyzeAnswerIn,
    user: User = Depends(get_current_user),
    service: FeedbackService = Depends(get_feedback_service),
) -> ApiResponse[AnalyzeAnswerOut]:
    """Structured feedback for an answer."""
    result = await service.analyze(user, payload.question, payload.user_answer, session_id=payload.session_id)
    return ApiResponse(data=result)


@router.post("/generate-audio", response_model=ApiResponse[GenerateAudioOut])
async def generate_audio(
    payload: GenerateAudioIn,
    user: User = Depends(get_current_user),
    service: SpeechService = Depends(get_speech_service),
) -> ApiResponse[GenerateAudioOut]:
    """Speech audio for question or feedback text, as an inline data URL."""
    result = await service.synthesize(user, payload.text, session_id=payload.session_id)
    return ApiResponse(data=result)
