import logging
from fastapi import APIRouter, HTTPException, Depends, status
from typing import List, Optional
from core.dependencies import get_db, get_interview_ai
from models.auth import User
from models.interview import (
    InterviewCreate, InterviewWithQuestions, CompletedInterview, InterviewSummary, Answer,
)
from auth.dependencies import get_current_user, get_optional_user
from services.database import InMemoryDatabase
from services.ai_fallback import FallbackInterviewAI

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interviews", tags=["Interview"])


@router.post("", response_model=InterviewWithQuestions, status_code=status.HTTP_201_CREATED)
async def create_interview(
    request: InterviewCreate,
    db: InMemoryDatabase = Depends(get_db),
    ai: FallbackInterviewAI = Depends(get_interview_ai),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """
    Start a new mock interview.
    Generates the questions and saves them in presentation order.
    """
    interview = None
    try:
        interview = db.create_interview(
            user_id=current_user.id if current_user else None,
            job_role=request.job_role,
            experience_level=request.experience_level,
            target_company=request.target_company,
            include_technical=request.include_technical,
            include_behavioral=request.include_behavioral,
            include_company_specific=request.include_company_specific,
            interview_length=request.interview_length,
        )

        result = await ai.generate_questions(
            request.job_role,
            request.experience_level,
            request.target_company,
            request.include_technical,
            request.include_behavioral,
            request.include_company_specific,
            request.interview_length,
        )

        questions = [
            db.create_question(interview.id, q.type, q.text, order)
            for order, q in enumerate(result.value)
        ]
        logger.info(
            f"Created interview {interview.id} with {len(questions)} questions ({result.source})"
        )

        return InterviewWithQuestions(interview=interview, questions=questions)

    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create interview")
        # an interview is never left with only part of its questions
        if interview is not None:
            db.delete_interview(interview.id)
        raise HTTPException(status_code=500, detail="Failed to create interview")


@router.get("", response_model=List[InterviewSummary])
async def list_interviews(
    db: InMemoryDatabase = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get all interviews for the current user, newest first
    """
    summaries = []
    for interview in db.list_interviews(user_id=current_user.id):
        questions = db.get_questions_by_interview(interview.id)
        answers = db.get_answers_by_interview(interview.id)
        scores = [a.score for a in answers if a.score is not None]
        summaries.append(InterviewSummary(
            interview=interview,
            total_questions=len(questions),
            answered_questions=len(answers),
            average_score=sum(scores) / len(scores) if scores else None,
            is_completed=interview.is_completed,
        ))
    return summaries


@router.get("/{interview_id}", response_model=InterviewWithQuestions)
async def get_interview(interview_id: int, db: InMemoryDatabase = Depends(get_db)):
    """
    Get an interview and its ordered questions
    """
    interview = db.get_interview(interview_id)
    if not interview:
        raise HTTPException(status_code=404, detail="Interview not found")

    return InterviewWithQuestions(
        interview=interview,
        questions=db.get_questions_by_interview(interview_id),
    )


@router.get("/{interview_id}/answers", response_model=List[Answer])
async def get_interview_answers(interview_id: int, db: InMemoryDatabase = Depends(get_db)):
    """
    Get every submitted answer for an interview, in question order
    """
    if not db.get_interview(interview_id):
        raise HTTPException(status_code=404, detail="Interview not found")

    return db.get_answers_by_interview(interview_id)


@router.post("/{interview_id}/complete", response_model=CompletedInterview)
async def complete_interview(
    interview_id: int,
    db: InMemoryDatabase = Depends(get_db),
    ai: FallbackInterviewAI = Depends(get_interview_ai),
):
    """
    Finish an interview and attach the readiness report.
    The end time and every report field are written in a single update.
    """
    try:
        interview = db.get_interview(interview_id)
        if not interview:
            raise HTTPException(status_code=404, detail="Interview not found")

        questions = db.get_questions_by_interview(interview_id)
        if not questions:
            raise HTTPException(status_code=400, detail="Interview has no questions")

        if not db.begin_completion(interview_id):
            raise HTTPException(status_code=400, detail="Interview already completed")

        try:
            answers = db.get_answers_by_interview(interview_id)

            result = await ai.generate_report(
                interview.job_role,
                interview.experience_level,
                questions,
                answers,
            )
            report = result.value

            updated = db.complete_interview(
                interview_id,
                readiness_score=report.readiness_score,
                strengths=report.strengths,
                weaknesses=report.weaknesses,
                category_scores=report.category_scores,
                recommendations=report.recommendations,
            )
        finally:
            db.release_completion(interview_id)

        if updated is None:
            raise HTTPException(status_code=400, detail="Interview already completed")

        logger.info(
            f"Completed interview {interview_id}: readiness {report.readiness_score} ({result.source})"
        )

        return CompletedInterview(interview=updated, questions=questions, answers=answers)

    except HTTPException:
        raise
    except Exception:
        logger.exception(f"Failed to complete interview {interview_id}")
        raise HTTPException(status_code=500, detail="Failed to complete interview")
