from abc import ABC, abstractmethod

AUDIO_NOT_CONFIGURED = "Audio service not configured"
AUDIO_AUTH_FAILED = "Audio service authentication failed"
AUDIO_RATE_LIMITED = "Audio service rate limit exceeded. Please try again later."
AUDIO_FAILED = "Audio service request failed"


class SpeechProvider(ABC):
    # MIME type of the bytes returned by synthesize()
    media_type: str = "audio/mpeg"

    @abstractmethod
    async def synthesize(self, text: str) -> bytes:
        """
        Convert text to compressed audio bytes.
        Raises:
            ServiceUnavailableError: missing credentials, rejected credentials or throttling.
            UpstreamServiceError: any other provider failure.
        """
        pass

    async def aclose(self) -> None:
        """Release network resources owned by the provider."""
        return None
