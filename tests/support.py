from __future__ import annotations

import unittest
from typing import Any

from fastapi.testclient import TestClient

from interviewiq.core.config import Settings
from interviewiq.main import create_app
from interviewiq.providers.llm import LLMClient
from interviewiq.providers.speech import SpeechProvider

DEFAULT_QUESTION = "Walk me through how you would design a test plan for a login page."
FAKE_AUDIO = b"ID3\x03\x00fake-mp3-frames"


class FakeLLMClient(LLMClient):
    """Scripted replies; records every call."""

    def __init__(self, replies: list[str] | None = None, error: Exception | None = None) -> None:
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def complete(self, system_prompt: str, user_prompt: str, *, max_tokens: int, temperature: float) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else DEFAULT_QUESTION


class FakeSpeechProvider(SpeechProvider):
    def __init__(self, audio: bytes = FAKE_AUDIO, error: Exception | None = None) -> None:
        self.audio = audio
        self.error = error
        self.calls: list[str] = []

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.audio


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "DATABASE_URL": "sqlite+aiosqlite://",
        "OPENAI_API_KEY": None,
        "ELEVENLABS_API_KEY": None,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ApiTestCase(unittest.TestCase):
    """Runs the real app against a fresh in-memory database per test."""

    def setUp(self) -> None:
        self.llm = FakeLLMClient()
        self.speech = FakeSpeechProvider()
        self.app = create_app(make_settings(), llm_client=self.llm, speech_provider=self.speech)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

        self.token, self.user_id = self.register_and_login("owner@example.com")
        self.other_token, self.other_user_id = self.register_and_login("someone.else@example.com")

    def register_and_login(self, email: str, password: str = "secret123") -> tuple[str, int]:
        res = self.client.post("/auth/register", json={"name": "Test", "email": email, "password": password})
        self.assertEqual(res.status_code, 201, res.text)
        user_id = res.json()["data"]["id"]

        res = self.client.post("/auth/login", json={"email": email, "password": password})
        self.assertEqual(res.status_code, 200, res.text)
        return res.json()["data"]["token"], user_id

    def headers(self, token: str | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {token or self.token}"}

    def create_interview(self, token: str | None = None, **body: Any) -> dict[str, Any]:
        body.setdefault("role", "Backend Developer")
        body.setdefault("difficulty", "medium")
        res = self.client.post("/interviews", json=body, headers=self.headers(token))
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["data"]

    def fetch_interview(self, interview_id: str, token: str | None = None) -> dict[str, Any]:
        res = self.client.get(f"/interviews/{interview_id}", headers=self.headers(token))
        self.assertEqual(res.status_code, 200, res.text)
        return res.json()["data"]
