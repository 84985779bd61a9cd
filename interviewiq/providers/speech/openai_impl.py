from __future__ import annotations

import logging

import openai
from openai import AsyncOpenAI

from interviewiq.core.exceptions import ServiceUnavailableError, UpstreamServiceError
from interviewiq.providers.speech.base import (
    AUDIO_AUTH_FAILED,
    AUDIO_FAILED,
    AUDIO_NOT_CONFIGURED,
    AUDIO_RATE_LIMITED,
    SpeechProvider,
)

logger = logging.getLogger("interviewiq.providers.speech.openai")


class OpenAISpeechProvider(SpeechProvider):
    """OpenAI speech endpoint, reached with the language-model account."""

    def __init__(self, client: AsyncOpenAI | None, *, model: str = "gpt-4o-mini-tts", voice: str = "alloy") -> None:
        self._client = client
        self.model = model
        self.voice = voice

    async def synthesize(self, text: str) -> bytes:
        if self._client is None:
            raise ServiceUnavailableError(AUDIO_NOT_CONFIGURED)

        try:
            response = await self._client.audio.speech.create(
                model=self.model,
                voice=self.voice,
                input=text,
                response_format="mp3",
            )
        except openai.AuthenticationError as exc:
            logger.warning("OpenAI speech rejected the API key")
            raise ServiceUnavailableError(AUDIO_AUTH_FAILED) from exc
        except openai.RateLimitError as exc:
            logger.warning("OpenAI speech rate limit hit")
            raise ServiceUnavailableError(AUDIO_RATE_LIMITED) from exc
        except openai.OpenAIError as exc:
            logger.error(f"OpenAI speech request failed: {exc}")
            raise UpstreamServiceError(AUDIO_FAILED) from exc

        audio = response.content
        logger.info(f"OpenAI speech synthesized {len(text)} chars -> {len(audio)} bytes")
        return audio
