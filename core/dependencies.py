from fastapi import Request
from core.config import Settings
from services.database import InMemoryDatabase
from services.ai_fallback import FallbackInterviewAI


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> InMemoryDatabase:
    return request.app.state.db


def get_interview_ai(request: Request) -> FallbackInterviewAI:
    return request.app.state.interview_ai
