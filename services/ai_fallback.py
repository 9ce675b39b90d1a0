"""
Fallback wrapper around any InterviewAIProvider.

Each operation returns an AIResult saying whether the provider answered or
canned data was substituted, so callers and tests can tell the paths apart.
The interview flow never hard-fails because the AI is unavailable.
"""
import logging
import math
import random
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from models.interview import (
    GeneratedQuestion, AnswerFeedback, InterviewReport, Question, Answer,
    QUESTION_COUNTS,
)
from services.interview_ai import InterviewAIProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROVIDER = "provider"
FALLBACK = "fallback"

# The first five are always served for a short interview
FALLBACK_QUESTIONS = [
    GeneratedQuestion(type="behavioral", text="Tell me about yourself and your most relevant experience for this role."),
    GeneratedQuestion(type="technical", text="Describe a challenging technical problem you solved recently. How did you approach it?"),
    GeneratedQuestion(type="behavioral", text="Tell me about a time you disagreed with a teammate. How did you resolve it?"),
    GeneratedQuestion(type="technical", text="How do you make sure the code you ship is reliable and maintainable?"),
    GeneratedQuestion(type="behavioral", text="Where do you see yourself growing professionally over the next few years?"),
    GeneratedQuestion(type="technical", text="Walk me through how you would design a feature from requirements to release."),
    GeneratedQuestion(type="behavioral", text="Describe a time you had to learn something new quickly to deliver a project."),
    GeneratedQuestion(type="technical", text="How do you approach debugging an issue that only happens in production?"),
    GeneratedQuestion(type="behavioral", text="Tell me about a project that failed or missed its goals. What did you learn?"),
    GeneratedQuestion(type="technical", text="What trade-offs do you consider when choosing between two technical solutions?"),
    GeneratedQuestion(type="behavioral", text="How do you prioritize when you have several urgent tasks at once?"),
    GeneratedQuestion(type="technical", text="Explain how you would improve the performance of a slow application."),
    GeneratedQuestion(type="behavioral", text="Describe a time you received critical feedback. How did you respond?"),
    GeneratedQuestion(type="technical", text="How do you keep your technical skills up to date?"),
    GeneratedQuestion(type="behavioral", text="Why are you interested in this position, and what would you bring to the team?"),
]

FALLBACK_FEEDBACK = (
    "Thank you for your answer. You addressed the question and gave relevant context. "
    "Adding concrete examples and measurable outcomes would make it stronger."
)
FALLBACK_ANSWER_STRENGTHS = ["Clear communication", "Relevant experience"]
FALLBACK_ANSWER_WEAKNESSES = ["Could include more specific examples", "Could quantify results"]

FALLBACK_REPORT_STRENGTHS = [
    "Communicates ideas clearly",
    "Shows relevant experience for the role",
    "Stays structured when answering",
]
FALLBACK_REPORT_WEAKNESSES = [
    "Answers could use more concrete examples",
    "Results are rarely quantified",
    "Technical depth varies between answers",
]
FALLBACK_RECOMMENDATIONS = [
    "Practice answering behavioral questions with the STAR method",
    "Prepare two or three detailed stories about past projects",
    "Review core technical concepts for the role",
]
REPORT_CATEGORIES = ["technical", "behavioral", "communication", "problemSolving"]


@dataclass
class AIResult(Generic[T]):
    value: T
    source: str
    error: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.source == FALLBACK


def fallback_questions(interview_length: str) -> List[GeneratedQuestion]:
    return list(FALLBACK_QUESTIONS[:QUESTION_COUNTS[interview_length]])


def fallback_feedback() -> AnswerFeedback:
    return AnswerFeedback(
        score=random.randint(70, 100),
        feedback=FALLBACK_FEEDBACK,
        strengths=list(FALLBACK_ANSWER_STRENGTHS),
        weaknesses=list(FALLBACK_ANSWER_WEAKNESSES),
    )


def average_score(answers: List[Answer]) -> int:
    """Mean of the scored answers, rounded half up; 0 when nothing is scored."""
    scores = [a.score for a in answers if a.score is not None]
    if not scores:
        return 0
    return math.floor(sum(scores) / len(scores) + 0.5)


def fallback_report(answers: List[Answer]) -> InterviewReport:
    return InterviewReport(
        readiness_score=average_score(answers),
        strengths=list(FALLBACK_REPORT_STRENGTHS),
        weaknesses=list(FALLBACK_REPORT_WEAKNESSES),
        category_scores={category: random.randint(65, 95) for category in REPORT_CATEGORIES},
        recommendations=list(FALLBACK_RECOMMENDATIONS),
    )


class FallbackInterviewAI:
    def __init__(self, provider: InterviewAIProvider):
        self.provider = provider

    @property
    def provider_name(self) -> str:
        return self.provider.name

    def _fallback(self, operation: str, error: Exception, value):
        logger.warning(f"AI {operation} failed ({self.provider.name}), using fallback: {error}")
        return AIResult(value=value, source=FALLBACK, error=str(error))

    async def generate_questions(self, job_role: str, experience_level: str, target_company: Optional[str],
                                 include_technical: bool, include_behavioral: bool,
                                 include_company_specific: bool,
                                 interview_length: str) -> AIResult[List[GeneratedQuestion]]:
        try:
            questions = await self.provider.generate_questions(
                job_role, experience_level, target_company,
                include_technical, include_behavioral, include_company_specific,
                interview_length,
            )
            return AIResult(value=questions, source=PROVIDER)
        except Exception as e:
            return self._fallback("question generation", e, fallback_questions(interview_length))

    async def score_answer(self, question_text: str, question_type: str, answer_text: str,
                           job_role: str, experience_level: str) -> AIResult[AnswerFeedback]:
        try:
            feedback = await self.provider.score_answer(
                question_text, question_type, answer_text, job_role, experience_level
            )
            return AIResult(value=feedback, source=PROVIDER)
        except Exception as e:
            return self._fallback("answer scoring", e, fallback_feedback())

    async def generate_report(self, job_role: str, experience_level: str,
                              questions: List[Question], answers: List[Answer]) -> AIResult[InterviewReport]:
        try:
            report = await self.provider.generate_report(job_role, experience_level, questions, answers)
            return AIResult(value=report, source=PROVIDER)
        except Exception as e:
            return self._fallback("report generation", e, fallback_report(answers))
