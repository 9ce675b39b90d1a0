"""
Test Configuration

pytest fixtures shared by the store, AI and API tests
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app
from services.database import InMemoryDatabase
from services.interview_ai import InterviewAIProvider


class StubProvider(InterviewAIProvider):
    """Provider that replays canned JSON replies (or raises) instead of calling an API."""

    name = "stub"

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    async def _complete_json(self, system, prompt):
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)


@pytest.fixture
def test_settings():
    """Settings with no AI credentials"""
    return Settings(
        _env_file=None,
        ai_provider="none",
        openai_api_key=None,
        gemini_api_key=None,
        jwt_secret_key="test-secret-key",
    )


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def make_client(test_settings, db):
    """Build a TestClient around a fresh app; pass a provider to replace the unconfigured one."""
    def _make(provider=None):
        app = create_app(settings=test_settings, db=db, provider=provider)
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    """Client whose AI calls always fall back to canned data"""
    return make_client()


@pytest.fixture
def interview_payload():
    return {
        "jobRole": "Software Engineer",
        "experienceLevel": "mid-level",
        "interviewLength": "short",
        "includeTechnical": True,
        "includeBehavioral": True,
    }


class SlowStubProvider(StubProvider):
    """StubProvider that waits before replying, so requests can overlap"""

    def __init__(self, replies=None, delay=0.05):
        super().__init__(replies=replies)
        self.delay = delay

    async def _complete_json(self, system, prompt):
        await asyncio.sleep(self.delay)
        return await super()._complete_json(system, prompt)
