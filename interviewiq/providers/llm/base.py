from abc import ABC, abstractmethod


class LLMClient(ABC):
    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Run one chat completion with a system/user message pair.
        Returns:
            The generated text, stripped.
        Raises:
            ServiceUnavailableError: provider not configured, out of quota, throttled or over capacity.
            UpstreamServiceError: any other provider failure.
        """
        pass
