from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings.

    Attributes:
        DATABASE_URL: SQLAlchemy async DB URL (sqlite+aiosqlite or postgresql+psycopg).
        TOKEN_TTL_MINUTES: bearer token lifetime in minutes.
        OPENAI_API_KEY: language-model credential; when unset the AI routes answer 503.
        OPENAI_MODEL: chat completion model.
        TTS_PROVIDER: which speech backend serves /ai/generate-audio.
        ELEVENLABS_API_KEY: credential for the elevenlabs backend.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    PROJECT_NAME: str = "InterviewIQ API"
    VERSION: str = "1.0.0"

    DATABASE_URL: str = "sqlite+aiosqlite:///./interviewiq.db"
    TOKEN_TTL_MINUTES: int = 60 * 24

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"

    # Speech synthesis
    TTS_PROVIDER: Literal["elevenlabs", "openai"] = "elevenlabs"
    ELEVENLABS_API_KEY: str | None = None
    ELEVENLABS_BASE_URL: str = "https://api.elevenlabs.io"
    ELEVENLABS_VOICE_ID: str = "EXAVITQu4vr4xnSDxMaL"
    ELEVENLABS_MODEL_ID: str = "eleven_monolingual_v1"
    OPENAI_TTS_MODEL: str = "gpt-4o-mini-tts"
    OPENAI_TTS_VOICE: str = "alloy"
    TTS_TIMEOUT_SECONDS: float = 30.0

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]


def get_settings() -> Settings:
    """Load settings from the environment.

    Returns:
        Settings: a fresh settings instance.
    """
    return Settings()
