from .base import CamelModel
from .auth import UserCreate, UserLogin, Token, TokenData, User, UserPublic
from .interview import (
    Interview, Question, Answer,
    InterviewCreate, AnswerSubmit,
    InterviewWithQuestions, CompletedInterview, InterviewSummary,
    GeneratedQuestion, AnswerFeedback, InterviewReport,
    QUESTION_COUNTS,
)
