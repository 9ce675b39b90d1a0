"""
AI providers for question generation, answer scoring and the final report.

Every provider exposes the same three coroutines and makes exactly one
upstream call per operation. Output is parsed as JSON and validated with
pydantic; anything malformed raises AIResponseError.
"""
import json
import logging
from typing import List, Optional

from openai import AsyncOpenAI
from google import genai
from google.genai import types
from pydantic import TypeAdapter, ValidationError

from core.config import Settings
from models.interview import (
    GeneratedQuestion, AnswerFeedback, InterviewReport, Question, Answer,
    QUESTION_COUNTS,
)

logger = logging.getLogger(__name__)

_questions_adapter = TypeAdapter(List[GeneratedQuestion])


class AIConfigurationError(Exception):
    """No AI provider is configured."""


class AIResponseError(Exception):
    """The provider replied with something we could not use."""


def _question_mix(include_technical: bool, include_behavioral: bool, include_company_specific: bool,
                  target_company: Optional[str]) -> str:
    kinds = []
    if include_technical:
        kinds.append("technical")
    if include_behavioral:
        kinds.append("behavioral")
    if include_company_specific and target_company:
        kinds.append(f"company-specific (about {target_company})")
    elif include_company_specific:
        kinds.append("company-specific")
    if not kinds:
        kinds = ["technical", "behavioral"]
    return ", ".join(kinds)


def build_questions_prompt(job_role: str, experience_level: str, target_company: Optional[str],
                           include_technical: bool, include_behavioral: bool,
                           include_company_specific: bool, count: int) -> str:
    company_line = f"The candidate is interviewing at {target_company}." if target_company else ""
    return f"""
    You are an expert interviewer for a {experience_level} {job_role} position.
    {company_line}

    Generate exactly {count} interview questions.
    Question types to include: {_question_mix(include_technical, include_behavioral, include_company_specific, target_company)}

    Rules:
    - Match the difficulty to a {experience_level} candidate
    - Make questions specific and practical
    - "type" must be one of: technical, behavioral, company-specific

    Respond in this exact JSON format:
    {{
        "questions": [
            {{
                "type": "behavioral",
                "text": "Tell me about a time when..."
            }},
            {{
                "type": "technical",
                "text": "How would you implement..."
            }}
        ]
    }}
    """


def build_score_prompt(question_text: str, question_type: str, answer_text: str,
                       job_role: str, experience_level: str) -> str:
    return f"""
    You are an expert interviewer evaluating a candidate's answer for a {experience_level} {job_role} position.

    Interview Question ({question_type}):
    {question_text}

    Candidate's Answer:
    {answer_text}

    Evaluate this answer and provide:
    1. Score (1-100) - Be realistic and fair
    2. Feedback - a short paragraph of constructive feedback
    3. Strengths (2-3 specific things they did well)
    4. Weaknesses (2-3 areas for improvement)

    Respond in this exact JSON format:
    {{
        "score": 75,
        "feedback": "feedback paragraph",
        "strengths": ["strength 1", "strength 2"],
        "weaknesses": ["weakness 1", "weakness 2"]
    }}
    """


def build_report_prompt(job_role: str, experience_level: str,
                        questions: List[Question], answers: List[Answer]) -> str:
    answers_by_question = {a.question_id: a for a in answers}
    summary_text = ""
    for i, q in enumerate(questions, 1):
        answer = answers_by_question.get(q.id)
        if answer is None:
            summary_text += f"""
            Q{i} ({q.type}): {q.text}
            Answer: (not answered)
            """
            continue
        summary_text += f"""
            Q{i} ({q.type}): {q.text}
            Answer: {answer.answer_text[:500]}
            Score: {answer.score}/100
            """

    return f"""
    You are a senior interviewer providing final feedback on a {experience_level} {job_role} mock interview.

    Questions and Performance:
    {summary_text}

    Provide an overall assessment including:
    1. Overall readiness score (0-100)
    2. Top 3 strengths across all answers
    3. Top 3 areas for improvement
    4. A score (0-100) per category: technical, behavioral, communication, problemSolving
    5. Specific recommendations for interview preparation

    Respond in this exact JSON format:
    {{
        "readinessScore": 80,
        "strengths": ["strength 1", "strength 2", "strength 3"],
        "weaknesses": ["weakness 1", "weakness 2", "weakness 3"],
        "categoryScores": {{"technical": 80, "behavioral": 75, "communication": 85, "problemSolving": 78}},
        "recommendations": ["rec 1", "rec 2", "rec 3"]
    }}
    """


def parse_json_object(content: Optional[str]) -> dict:
    if not content:
        raise AIResponseError("Empty response from AI provider")
    text = content.strip()
    # Some models wrap JSON in a markdown fence
    if text.startswith("```"):
        text = text.strip("`")
        if text.startswith("json"):
            text = text[4:]
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"AI response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AIResponseError("AI response is not a JSON object")
    return data


class InterviewAIProvider:
    """Shared prompt and parsing logic; subclasses only implement _complete_json."""

    name = "base"

    async def _complete_json(self, system: str, prompt: str) -> dict:
        raise NotImplementedError

    async def generate_questions(self, job_role: str, experience_level: str, target_company: Optional[str],
                                 include_technical: bool, include_behavioral: bool,
                                 include_company_specific: bool, interview_length: str) -> List[GeneratedQuestion]:
        count = QUESTION_COUNTS[interview_length]
        prompt = build_questions_prompt(
            job_role, experience_level, target_company,
            include_technical, include_behavioral, include_company_specific, count,
        )
        data = await self._complete_json(
            "You are an expert interviewer. Respond with valid JSON.", prompt
        )
        try:
            questions = _questions_adapter.validate_python(data.get("questions"))
        except ValidationError as e:
            raise AIResponseError(f"Invalid questions payload: {e}") from e
        if not questions:
            raise AIResponseError("AI provider returned no questions")
        return questions[:count]

    async def score_answer(self, question_text: str, question_type: str, answer_text: str,
                           job_role: str, experience_level: str) -> AnswerFeedback:
        prompt = build_score_prompt(question_text, question_type, answer_text, job_role, experience_level)
        data = await self._complete_json(
            "You are an expert interviewer providing constructive feedback. Respond with valid JSON.", prompt
        )
        try:
            return AnswerFeedback.model_validate(data)
        except ValidationError as e:
            raise AIResponseError(f"Invalid feedback payload: {e}") from e

    async def generate_report(self, job_role: str, experience_level: str,
                              questions: List[Question], answers: List[Answer]) -> InterviewReport:
        prompt = build_report_prompt(job_role, experience_level, questions, answers)
        data = await self._complete_json(
            "You are a senior interviewer providing comprehensive feedback. Respond with valid JSON.", prompt
        )
        try:
            return InterviewReport.model_validate(data)
        except ValidationError as e:
            raise AIResponseError(f"Invalid report payload: {e}") from e


class OpenAIProvider(InterviewAIProvider):
    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o", client: Optional[AsyncOpenAI] = None):
        self.model = model
        self.client = client or AsyncOpenAI(api_key=api_key)

    async def _complete_json(self, system: str, prompt: str) -> dict:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt}
            ],
            temperature=0.7,
            response_format={"type": "json_object"}
        )
        return parse_json_object(response.choices[0].message.content)


class GeminiProvider(InterviewAIProvider):
    name = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash", client: Optional[genai.Client] = None):
        self.model = model
        self.client = client or genai.Client(api_key=api_key)

    async def _complete_json(self, system: str, prompt: str) -> dict:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system,
                temperature=0.7,
                response_mime_type="application/json",
            ),
        )
        return parse_json_object(response.text)


class UnconfiguredProvider(InterviewAIProvider):
    """Stand-in when no credentials are configured: every call fails immediately."""

    name = "none"

    async def _complete_json(self, system: str, prompt: str) -> dict:
        raise AIConfigurationError("No AI provider configured: set OPENAI_API_KEY or GEMINI_API_KEY")


def build_provider(settings: Settings) -> InterviewAIProvider:
    if settings.ai_provider == "openai":
        if not settings.openai_api_key:
            raise AIConfigurationError("AI_PROVIDER is openai but OPENAI_API_KEY is not set")
        logger.info(f"Using OpenAI provider ({settings.openai_model})")
        return OpenAIProvider(settings.openai_api_key, settings.openai_model)
    if settings.ai_provider == "gemini":
        if not settings.gemini_api_key:
            raise AIConfigurationError("AI_PROVIDER is gemini but GEMINI_API_KEY is not set")
        logger.info(f"Using Gemini provider ({settings.gemini_model})")
        return GeminiProvider(settings.gemini_api_key, settings.gemini_model)
    logger.warning("No AI credentials configured, every AI call will use fallback data")
    return UnconfiguredProvider()
