"""
Mock Interview API.

Run with: uvicorn main:app --reload --port 8000
"""
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, load_settings
from routers import answers, auth, interview
from services.ai_fallback import FallbackInterviewAI
from services.database import InMemoryDatabase
from services.interview_ai import InterviewAIProvider, build_provider

logger = logging.getLogger(__name__)


def format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query"))
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid request"))
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"detail": message})


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[InMemoryDatabase] = None,
    provider: Optional[InterviewAIProvider] = None,
) -> FastAPI:
    """
    Build the application with its own store and AI capability.
    Anything not passed in is built from the environment.
    """
    settings = settings or load_settings()

    app = FastAPI(title="Mock Interview API", version="1.0.0")

    app.state.settings = settings
    app.state.db = db or InMemoryDatabase()
    app.state.interview_ai = FallbackInterviewAI(provider or build_provider(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth.router, prefix="/api")
    app.include_router(interview.router, prefix="/api")
    app.include_router(answers.router, prefix="/api")
    # the interview lifecycle is also served at its unprefixed paths
    app.include_router(interview.router, include_in_schema=False)
    app.include_router(answers.router, include_in_schema=False)

    @app.get("/")
    def read_root():
        return {"message": "Mock Interview API is running"}

    @app.get("/health")
    def health():
        return {"status": "healthy", "ai_provider": app.state.interview_ai.provider_name}

    return app


settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
