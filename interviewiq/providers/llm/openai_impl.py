from __future__ import annotations

import logging

import openai
from openai import AsyncOpenAI

from interviewiq.core.exceptions import ServiceUnavailableError, UpstreamServiceError
from interviewiq.providers.llm.base import LLMClient

logger = logging.getLogger("interviewiq.providers.llm")

AI_NOT_CONFIGURED = "AI service not configured"
AI_UNAVAILABLE = "AI service temporarily unavailable. Please try again later."
AI_RATE_LIMITED = "AI service rate limit exceeded. Please try again later."
AI_FAILED = "AI service request failed"


class OpenAILLMClient(LLMClient):
    """Chat completions through the OpenAI async SDK.

    The SDK client is created once per app and shared with the OpenAI speech
    provider. ``client=None`` means no credential was configured.
    """

    def __init__(self, client: AsyncOpenAI | None, model: str = "gpt-3.5-turbo") -> None:
        self._client = client
        self.model = model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        if self._client is None:
            raise ServiceUnavailableError(AI_NOT_CONFIGURED)

        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.RateLimitError as exc:
            if exc.code == "insufficient_quota":
                logger.warning("OpenAI quota exhausted")
                raise ServiceUnavailableError(AI_UNAVAILABLE) from exc
            logger.warning("OpenAI rate limit hit")
            raise ServiceUnavailableError(AI_RATE_LIMITED) from exc
        except openai.APIStatusError as exc:
            if exc.status_code == 503:
                logger.warning("OpenAI over capacity (503)")
                raise ServiceUnavailableError(AI_UNAVAILABLE) from exc
            logger.error(f"OpenAI request failed with status {exc.status_code}: {exc.message}")
            raise UpstreamServiceError(AI_FAILED) from exc
        except openai.OpenAIError as exc:
            logger.error(f"OpenAI request failed: {exc}")
            raise UpstreamServiceError(AI_FAILED) from exc

        content = completion.choices[0].message.content or ""
        return content.strip()
