from __future__ import annotations

import logging

from openai import AsyncOpenAI

from interviewiq.core.config import Settings
from interviewiq.providers.llm import LLMClient, OpenAILLMClient
from interviewiq.providers.speech import ElevenLabsSpeechProvider, OpenAISpeechProvider, SpeechProvider

logger = logging.getLogger("interviewiq.providers")


def build_openai_client(settings: Settings) -> AsyncOpenAI | None:
    """Shared OpenAI SDK client, or None when no key is configured."""
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; AI routes will answer 503")
        return None
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY)


def build_llm_client(settings: Settings, openai_client: AsyncOpenAI | None) -> LLMClient:
    return OpenAILLMClient(openai_client, model=settings.OPENAI_MODEL)


def build_speech_provider(settings: Settings, openai_client: AsyncOpenAI | None) -> SpeechProvider:
    """Pick the speech backend named by ``TTS_PROVIDER``.

    Args:
        settings: app settings.
        openai_client: shared SDK client for the openai backend.

    Returns:
        SpeechProvider: configured backend.
    """
    if settings.TTS_PROVIDER == "openai":
        logger.info("Speech provider: openai")
        return OpenAISpeechProvider(openai_client, model=settings.OPENAI_TTS_MODEL, voice=settings.OPENAI_TTS_VOICE)

    logger.info("Speech provider: elevenlabs")
    return ElevenLabsSpeechProvider(
        settings.ELEVENLABS_API_KEY,
        voice_id=settings.ELEVENLABS_VOICE_ID,
        model_id=settings.ELEVENLABS_MODEL_ID,
        base_url=settings.ELEVENLABS_BASE_URL,
        timeout=settings.TTS_TIMEOUT_SECONDS,
    )
