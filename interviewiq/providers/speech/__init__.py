from interviewiq.providers.speech.base import SpeechProvider
from interviewiq.providers.speech.elevenlabs_impl import ElevenLabsSpeechProvider
from interviewiq.providers.speech.openai_impl import OpenAISpeechProvider

__all__ = ["ElevenLabsSpeechProvider", "OpenAISpeechProvider", "SpeechProvider"]
