from __future__ import annotations

import logging

import httpx

from interviewiq.core.exceptions import ServiceUnavailableError, UpstreamServiceError
from interviewiq.providers.speech.base import (
    AUDIO_AUTH_FAILED,
    AUDIO_FAILED,
    AUDIO_NOT_CONFIGURED,
    AUDIO_RATE_LIMITED,
    SpeechProvider,
)

logger = logging.getLogger("interviewiq.providers.speech.elevenlabs")

# fixed voice quality for every request
VOICE_SETTINGS = {"stability": 0.5, "similarity_boost": 0.75}


class ElevenLabsSpeechProvider(SpeechProvider):
    """ElevenLabs text-to-speech over plain HTTP."""

    def __init__(
        self,
        api_key: str | None,
        *,
        voice_id: str = "EXAVITQu4vr4xnSDxMaL",
        model_id: str = "eleven_monolingual_v1",
        base_url: str = "https://api.elevenlabs.io",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.voice_id = voice_id
        self.model_id = model_id
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def synthesize(self, text: str) -> bytes:
        if not self.api_key:
            raise ServiceUnavailableError(AUDIO_NOT_CONFIGURED)

        try:
            response = await self._client.post(
                f"{self.base_url}/v1/text-to-speech/{self.voice_id}",
                headers={
                    "Accept": self.media_type,
                    "Content-Type": "application/json",
                    "xi-api-key": self.api_key,
                },
                json={
                    "text": text,
                    "model_id": self.model_id,
                    "voice_settings": VOICE_SETTINGS,
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning(f"ElevenLabs returned {status}: {exc.response.text[:200]}")
            if status == 401:
                raise ServiceUnavailableError(AUDIO_AUTH_FAILED) from exc
            if status == 429:
                raise ServiceUnavailableError(AUDIO_RATE_LIMITED) from exc
            raise UpstreamServiceError(AUDIO_FAILED) from exc
        except httpx.HTTPError as exc:
            logger.error(f"ElevenLabs request failed: {exc}")
            raise UpstreamServiceError(AUDIO_FAILED) from exc

        logger.info(f"ElevenLabs synthesized {len(text)} chars -> {len(response.content)} bytes")
        return response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
