from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Literal
from datetime import datetime
from .base import CamelModel

ExperienceLevel = Literal["junior", "mid-level", "senior"]
InterviewLength = Literal["short", "medium", "long"]
QuestionType = Literal["technical", "behavioral", "company-specific"]

QUESTION_COUNTS = {"short": 5, "medium": 10, "long": 15}


# ============ RECORDS ============

class Interview(CamelModel):
    id: int
    user_id: Optional[int] = None
    job_role: str
    experience_level: ExperienceLevel
    target_company: Optional[str] = None
    include_technical: bool
    include_behavioral: bool
    include_company_specific: bool
    interview_length: InterviewLength
    start_time: datetime
    end_time: Optional[datetime] = None
    readiness_score: Optional[int] = None
    strengths: Optional[List[str]] = None
    weaknesses: Optional[List[str]] = None
    category_scores: Optional[Dict[str, int]] = None
    recommendations: Optional[List[str]] = None

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None


class Question(CamelModel):
    id: int
    interview_id: int
    type: QuestionType
    text: str
    order: int


class Answer(CamelModel):
    id: int
    question_id: int
    answer_text: str
    feedback: Optional[str] = None
    score: Optional[int] = None
    strengths: Optional[List[str]] = None
    weaknesses: Optional[List[str]] = None


# ============ REQUESTS ============

class InterviewCreate(CamelModel):
    job_role: str = Field(min_length=1)
    experience_level: ExperienceLevel
    target_company: Optional[str] = None
    include_technical: bool = True
    include_behavioral: bool = True
    include_company_specific: bool = False
    interview_length: InterviewLength


class AnswerSubmit(CamelModel):
    interview_id: int
    question_id: int
    answer_text: str = Field(min_length=1)


# ============ RESPONSES ============

class InterviewWithQuestions(CamelModel):
    interview: Interview
    questions: List[Question]


class CompletedInterview(CamelModel):
    interview: Interview
    questions: List[Question]
    answers: List[Answer]


class InterviewSummary(CamelModel):
    interview: Interview
    total_questions: int
    answered_questions: int
    average_score: Optional[float] = None
    is_completed: bool


# ============ AI PAYLOADS ============

class GeneratedQuestion(BaseModel):
    type: QuestionType
    text: str = Field(min_length=1)


class AnswerFeedback(BaseModel):
    score: int
    feedback: str
    strengths: List[str] = []
    weaknesses: List[str] = []


class InterviewReport(CamelModel):
    readiness_score: int
    strengths: List[str] = []
    weaknesses: List[str] = []
    category_scores: Dict[str, int] = {}
    recommendations: List[str] = []
