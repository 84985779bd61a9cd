from __future__ import annotations

import logging

from interviewiq.core.exceptions import ValidationError
from interviewiq.models.interview import Difficulty
from interviewiq.models.user import User
from interviewiq.providers.llm import LLMClient
from interviewiq.schemas.ai import GenerateQuestionOut
from interviewiq.services.interview_service import InterviewService, parse_difficulty

logger = logging.getLogger("interviewiq.services.question")

DIFFICULTY_DESCRIPTIONS: dict[Difficulty, str] = {
    Difficulty.easy: "basic and straightforward, suitable for entry-level candidates",
    Difficulty.medium: "moderately challenging, suitable for mid-level professionals",
    Difficulty.hard: "complex and in-depth, suitable for senior-level candidates",
}

SYSTEM_PROMPT = (
    "You are an expert technical interviewer who creates realistic, "
    "role-specific interview questions."
)

MAX_TOKENS = 500
# repeated "new question" requests should differ
TEMPERATURE = 0.8


def build_question_prompt(role: str, difficulty: Difficulty) -> str:
    return (
        f"You are an expert technical interviewer. Generate a single, realistic interview question "
        f"for a {role} position.\n"
        f"The difficulty level should be {difficulty.value} ({DIFFICULTY_DESCRIPTIONS[difficulty]}).\n"
        "\n"
        "Requirements:\n"
        "- The question should be specific and practical\n"
        "- It should test relevant skills for the role\n"
        "- Include any necessary context or scenario\n"
        "- Do not include the answer\n"
        "\n"
        "Return ONLY the interview question, nothing else."
    )


class QuestionService:
    """Generates one interview question and optionally stores it on a session."""

    def __init__(self, llm: LLMClient, interviews: InterviewService) -> None:
        self.llm = llm
        self.interviews = interviews

    async def generate(
        self,
        caller: User,
        role: str | None,
        difficulty: str | None,
        session_id: str | None = None,
        reset_answer: bool = False,
    ) -> GenerateQuestionOut:
        """Ask the model for a question.

        Args:
            caller: authenticated caller.
            role: job role the question targets.
            difficulty: easy, medium or hard.
            session_id: session to write the question onto, if owned by caller.
            reset_answer: also clear the session's answer, feedback and audio marker.

        Returns:
            GenerateQuestionOut: question plus the session id actually written (or None).

        Raises:
            ValidationError: missing role/difficulty or unknown difficulty.
            ServiceUnavailableError: provider out of quota or throttled.
        """
        if not role or not role.strip() or not difficulty:
            raise ValidationError("Please provide role and difficulty")
        role = role.strip()
        level = parse_difficulty(difficulty)

        question = await self.llm.complete(
            SYSTEM_PROMPT,
            build_question_prompt(role, level),
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )
        logger.info(f"Generated {level.value} question for role '{role}' ({len(question)} chars)")

        interview = await self.interviews.find_owned(caller, session_id)
        if interview is not None:
            await self.interviews.record_question(interview, question, reset_answer=reset_answer)

        return GenerateQuestionOut(
            question=question,
            role=role,
            difficulty=level.value,
            session_id=interview.id if interview is not None else None,
        )
