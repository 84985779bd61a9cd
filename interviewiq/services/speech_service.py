from __future__ import annotations

import base64
import logging

from interviewiq.common.time import epoch_millis
from interviewiq.core.exceptions import ValidationError
from interviewiq.models.user import User
from interviewiq.providers.speech import SpeechProvider
from interviewiq.schemas.ai import GenerateAudioOut
from interviewiq.services.interview_service import InterviewService

logger = logging.getLogger("interviewiq.services.speech")

MAX_TEXT_LENGTH = 5000


def to_data_url(audio: bytes, media_type: str) -> str:
    """Inline-encode audio so it can sit inside a JSON payload."""
    return f"data:{media_type};base64,{base64.b64encode(audio).decode('ascii')}"


def audio_marker() -> str:
    # Audio itself is not persisted; the session only records that synthesis happened.
    return f"audio_generated_{epoch_millis()}"


class SpeechService:
    """Text-to-speech behind a single provider-agnostic contract."""

    def __init__(self, provider: SpeechProvider, interviews: InterviewService) -> None:
        self.provider = provider
        self.interviews = interviews

    async def synthesize(self, caller: User, text: str | None, session_id: str | None = None) -> GenerateAudioOut:
        """Synthesize ``text`` and return it as a data URL.

        Args:
            caller: authenticated caller.
            text: 1..5000 characters.
            session_id: session to mark, if owned by caller.

        Returns:
            GenerateAudioOut: data URL plus the session id actually marked (or None).

        Raises:
            ValidationError: empty or too long text.
            ServiceUnavailableError: provider not configured, rejected key or throttled.
        """
        if not text or not text.strip():
            raise ValidationError("Please provide text to convert to audio")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(f"Text is too long. Maximum {MAX_TEXT_LENGTH} characters allowed.")

        audio = await self.provider.synthesize(text)

        interview = await self.interviews.find_owned(caller, session_id)
        if interview is not None:
            await self.interviews.record_audio(interview, audio_marker())

        return GenerateAudioOut(
            audio_url=to_data_url(audio, self.provider.media_type),
            session_id=interview.id if interview is not None else None,
        )
