import logging
from fastapi import APIRouter, HTTPException, Depends, status
from core.dependencies import get_db, get_interview_ai
from models.interview import AnswerSubmit, Answer
from services.database import InMemoryDatabase, DuplicateAnswerError, InterviewClosedError
from services.ai_fallback import FallbackInterviewAI

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/answers", tags=["Answers"])


@router.post("", response_model=Answer, status_code=status.HTTP_201_CREATED)
async def submit_answer(
    request: AnswerSubmit,
    db: InMemoryDatabase = Depends(get_db),
    ai: FallbackInterviewAI = Depends(get_interview_ai),
):
    """
    Submit an answer to an interview question and get AI feedback
    """
    try:
        interview = db.get_interview(request.interview_id)
        if not interview:
            raise HTTPException(status_code=404, detail="Interview not found")

        question = db.get_question(request.question_id)
        if not question or question.interview_id != request.interview_id:
            raise HTTPException(status_code=404, detail="Question not found")

        if db.is_interview_closed(interview.id):
            raise HTTPException(status_code=400, detail="Interview already completed")

        if db.get_answer_by_question(question.id):
            raise HTTPException(status_code=400, detail="Question has already been answered")

        answer = db.create_answer(question.id, request.answer_text)

        result = await ai.score_answer(
            question.text,
            question.type,
            request.answer_text,
            interview.job_role,
            interview.experience_level,
        )
        feedback = result.value

        updated = db.update_answer(
            answer.id,
            feedback=feedback.feedback,
            score=feedback.score,
            strengths=feedback.strengths,
            weaknesses=feedback.weaknesses,
        )
        logger.info(
            f"Scored answer {answer.id} for question {question.id}: {feedback.score} ({result.source})"
        )

        return updated

    except HTTPException:
        raise
    except DuplicateAnswerError:
        raise HTTPException(status_code=400, detail="Question has already been answered")
    except InterviewClosedError:
        raise HTTPException(status_code=400, detail="Interview already completed")
    except Exception:
        logger.exception("Failed to submit answer")
        raise HTTPException(status_code=500, detail="Failed to submit answer")
