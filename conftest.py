"""
pytest configuration – shared settings, a stub answer provider and a
client built from a fresh app per test so rate-limit buckets never leak
between tests.
"""
from __future__ import annotations

from typing import List

import pytest
from fastapi.testclient import TestClient

from bfhl_service.config import Settings
from bfhl_service.main import create_app


class StubAnswerProvider:
    """Records questions and returns a canned answer instead of calling out."""

    def __init__(self, answer: str = "Paris", error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.questions: List[str] = []

    async def single_word(self, question: str) -> str:
        self.questions.append(question)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        official_email="ops@example.com",
        openai_api_key="sk-test",
        rate_limit_rpm=60,
    )


@pytest.fixture
def provider() -> StubAnswerProvider:
    return StubAnswerProvider()


@pytest.fixture
def client(settings: Settings, provider: StubAnswerProvider) -> TestClient:
    return TestClient(create_app(settings, provider=provider))
