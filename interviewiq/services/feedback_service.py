from __future__ import annotations

import json
import logging
import re

from interviewiq.core.exceptions import ValidationError
from interviewiq.models.user import User
from interviewiq.providers.llm import LLMClient
from interviewiq.schemas.ai import AnalyzeAnswerOut
from interviewiq.schemas.feedback import FeedbackRecord
from interviewiq.services.interview_service import InterviewService

logger = logging.getLogger("interviewiq.services.feedback")

MIN_ANSWER_LENGTH = 10
MAX_TOKENS = 800
TEMPERATURE = 0.7
# stored when the model answers with nothing at all
EMPTY_REPLY_FEEDBACK = "No feedback was generated for this answer. Please try again."

SYSTEM_PROMPT = (
    "You are an expert interview coach who provides detailed, constructive feedback "
    "on interview answers. Be encouraging but honest."
)


def build_feedback_prompt(question: str, user_answer: str) -> str:
    return (
        "You are an expert interview coach providing constructive feedback.\n"
        "\n"
        f'Interview Question: "{question}"\n'
        "\n"
        f'Candidate\'s Answer: "{user_answer}"\n'
        "\n"
        "Analyze this answer and respond with ONLY a JSON object, no markdown and no other text, "
        "using exactly these keys:\n"
        "{\n"
        '  "spoken": "a natural, conversational summary that takes 15-25 seconds to read aloud",\n'
        '  "strengths": "what the candidate did well",\n'
        '  "improvements": "what could be better",\n'
        '  "suggestion": "how to improve the answer",\n'
        '  "overall": "brief overall assessment in 1-2 sentences"\n'
        "}\n"
        "\n"
        "Every value must be a string. Be concise but specific, and cover both content "
        "and communication style."
    )


def _clean_json_string(text: str) -> str:
    """Drop markdown code fences around a JSON payload."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]
    return text.strip()


def parse_feedback(raw: str) -> FeedbackRecord:
    """Parse the model reply into a FeedbackRecord.

    A reply that is not a JSON object (prose, a list, broken JSON), or an object
    with none of the feedback keys filled, becomes a fallback record whose
    ``spoken`` and ``overall`` carry the raw text.

    Args:
        raw: model output.

    Returns:
        FeedbackRecord: parsed or fallback record.
    """
    cleaned = _clean_json_string(raw)
    candidates = [cleaned]
    match = re.search(r"\{.*\}", cleaned, re.DOTALL)
    if match and match.group(0) != cleaned:
        candidates.append(match.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            record = FeedbackRecord.model_validate(data)
            # an object without any of the five keys carries nothing usable
            if not record.is_empty():
                return record

    logger.info("Feedback reply was not a usable JSON object; using raw-text fallback")
    return FeedbackRecord.from_raw_text(raw.strip() or EMPTY_REPLY_FEEDBACK)


class FeedbackService:
    """Turns a question/answer pair into structured feedback."""

    def __init__(self, llm: LLMClient, interviews: InterviewService) -> None:
        self.llm = llm
        self.interviews = interviews

    async def analyze(
        self,
        caller: User,
        question: str | None,
        user_answer: str | None,
        session_id: str | None = None,
    ) -> AnalyzeAnswerOut:
        """Request feedback and optionally store answer + feedback on a session.

        Raises:
            ValidationError: missing fields or an answer shorter than 10 characters.
            ServiceUnavailableError: provider out of quota or throttled.
        """
        if not question or not user_answer:
            raise ValidationError("Please provide both question and userAnswer")
        if len(user_answer.strip()) < MIN_ANSWER_LENGTH:
            raise ValidationError(
                f"Please provide a more detailed answer (at least {MIN_ANSWER_LENGTH} characters)"
            )

        raw = await self.llm.complete(
            SYSTEM_PROMPT,
            build_feedback_prompt(question, user_answer),
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )
        feedback = parse_feedback(raw)

        interview = await self.interviews.find_owned(caller, session_id)
        if interview is not None:
            await self.interviews.record_feedback(interview, user_answer, feedback)

        return AnalyzeAnswerOut(
            feedback=feedback,
            question=question,
            session_id=interview.id if interview is not None else None,
        )
