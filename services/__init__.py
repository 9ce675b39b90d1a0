from .database import InMemoryDatabase, DuplicateAnswerError, DuplicateUsernameError, InterviewClosedError
from .interview_ai import (
    InterviewAIProvider, OpenAIProvider, GeminiProvider, UnconfiguredProvider,
    AIConfigurationError, AIResponseError, build_provider,
)
from .ai_fallback import FallbackInterviewAI, AIResult
