from __future__ import annotations

from fastapi import APIRouter, Depends, status

from interviewiq.core.deps import get_current_user, get_interview_service
from interviewiq.models.user import User
from interviewiq.schemas.common import ApiResponse
from interviewiq.schemas.interview import InterviewCreateIn, InterviewOut, InterviewUpdateIn
from interviewiq.services.interview_service import InterviewService

router: APIRouter = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("", response_model=ApiResponse[InterviewOut], status_code=status.HTTP_201_CREATED)
async def create_interview(
    payload: InterviewCreateIn,
    user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
) -> ApiResponse[InterviewOut]:
    """Create an interview session owned by the caller.

    Args:
        payload: role and difficulty, optional initial content.
        user: authenticated caller.
        service: interview service.

    Returns:
        ApiResponse[InterviewOut]: created session.

    Raises:
        ValidationError: missing role/difficulty or constraint violation (400).
    """
    interview = await service.create(user, payload)
    return ApiResponse(message="Interview session created", data=InterviewOut.model_validate(interview))


@router.get("", response_model=ApiResponse[list[InterviewOut]])
async def list_interviews(
    user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
) -> ApiResponse[list[InterviewOut]]:
    """Caller's sessions, newest first."""
    interviews = await service.list_for(user)
    return ApiResponse(count=len(interviews), data=[InterviewOut.model_validate(i) for i in interviews])


@router.get("/{interview_id}", response_model=ApiResponse[InterviewOut])
async def get_interview(
    interview_id: str,
    user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
) -> ApiResponse[InterviewOut]:
    """Fetch one session (404 when missing, 403 when owned by someone else)."""
    interview = await service.get_owned(user, interview_id)
    return ApiResponse(data=InterviewOut.model_validate(interview))


@router.put("/{interview_id}", response_model=ApiResponse[InterviewOut])
async def update_interview(
    interview_id: str,
    payload: InterviewUpdateIn,
    user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
) -> ApiResponse[InterviewOut]:
    """Update whitelisted fields; anything else in the body is ignored."""
    interview = await service.update(user, interview_id, payload)
    return ApiResponse(message="Interview session updated", data=InterviewOut.model_validate(interview))


@router.delete("/{interview_id}", response_model=ApiResponse[dict])
async def delete_interview(
    interview_id: str,
    user: User = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
) -> ApiResponse[dict]:
    await service.delete(user, interview_id)
    return ApiResponse(message="Interview session deleted", data={})
