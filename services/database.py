"""
In-memory data store for users, interviews, questions and answers.

Each application builds its own InMemoryDatabase and hands it to request
handlers through app.state, so tests get isolated instances. Nothing is
persisted: a restart loses everything.
"""
import logging
import threading
from datetime import datetime, timezone
from itertools import count
from typing import Dict, List, Optional, Set

from models.auth import User
from models.interview import Interview, Question, Answer

logger = logging.getLogger(__name__)


class DuplicateAnswerError(Exception):
    """Raised when a question already has an answer."""


class DuplicateUsernameError(Exception):
    """Raised when registering a username that is already taken."""


class InterviewClosedError(Exception):
    """Raised when an interview is completed or its report is being generated."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryDatabase:
    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[int, User] = {}
        self._interviews: Dict[int, Interview] = {}
        self._questions: Dict[int, Question] = {}
        self._answers: Dict[int, Answer] = {}
        # question_id -> answer_id, enforces one answer per question
        self._answer_by_question: Dict[int, int] = {}
        # interviews whose report is being generated
        self._completing: Set[int] = set()
        self._ids = {
            "users": count(1),
            "interviews": count(1),
            "questions": count(1),
            "answers": count(1),
        }

    def _next_id(self, collection: str) -> int:
        return next(self._ids[collection])

    # ============ USERS ============

    def create_user(self, username: str, password: str) -> User:
        with self._lock:
            if self._find_user(username) is not None:
                raise DuplicateUsernameError(username)
            user = User(
                id=self._next_id("users"),
                username=username,
                password=password,
                created_at=utcnow(),
            )
            self._users[user.id] = user
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return self._find_user(username)

    def _find_user(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    # ============ INTERVIEWS ============

    def create_interview(self, **fields) -> Interview:
        with self._lock:
            interview = Interview(
                id=self._next_id("interviews"),
                start_time=utcnow(),
                **fields,
            )
            self._interviews[interview.id] = interview
        return interview

    def get_interview(self, interview_id: int) -> Optional[Interview]:
        return self._interviews.get(interview_id)

    def update_interview(self, interview_id: int, **fields) -> Optional[Interview]:
        """Apply every field in one replacement; returns None when the id is unknown."""
        with self._lock:
            interview = self._interviews.get(interview_id)
            if interview is None:
                return None
            updated = interview.model_copy(update=fields)
            self._interviews[interview_id] = updated
        return updated

    def delete_interview(self, interview_id: int) -> bool:
        """Remove an interview and its questions; used to undo a half-created interview."""
        with self._lock:
            if self._interviews.pop(interview_id, None) is None:
                return False
            for question_id in [q.id for q in self._questions.values() if q.interview_id == interview_id]:
                del self._questions[question_id]
        return True

    def is_interview_closed(self, interview_id: int) -> bool:
        with self._lock:
            return self._is_closed(interview_id)

    def _is_closed(self, interview_id: int) -> bool:
        interview = self._interviews.get(interview_id)
        return interview_id in self._completing or (interview is not None and interview.is_completed)

    def begin_completion(self, interview_id: int) -> bool:
        """
        Claim an interview for completion.
        Returns False when it is unknown, already completed, or claimed by
        another request. While claimed, no answers are accepted.
        """
        with self._lock:
            if interview_id not in self._interviews or self._is_closed(interview_id):
                return False
            self._completing.add(interview_id)
        return True

    def release_completion(self, interview_id: int) -> None:
        with self._lock:
            self._completing.discard(interview_id)

    def complete_interview(self, interview_id: int, **report) -> Optional[Interview]:
        """Write the end time and report in one update; None if unknown or already completed."""
        with self._lock:
            interview = self._interviews.get(interview_id)
            if interview is None or interview.is_completed:
                return None
            updated = interview.model_copy(update={"end_time": utcnow(), **report})
            self._interviews[interview_id] = updated
            self._completing.discard(interview_id)
        return updated

    def list_interviews(self, user_id: Optional[int] = None) -> List[Interview]:
        interviews = [
            i for i in self._interviews.values()
            if user_id is None or i.user_id == user_id
        ]
        return sorted(interviews, key=lambda i: (i.start_time, i.id), reverse=True)

    # ============ QUESTIONS ============

    def create_question(self, interview_id: int, type: str, text: str, order: int) -> Question:
        with self._lock:
            question = Question(
                id=self._next_id("questions"),
                interview_id=interview_id,
                type=type,
                text=text,
                order=order,
            )
            self._questions[question.id] = question
        return question

    def get_question(self, question_id: int) -> Optional[Question]:
        return self._questions.get(question_id)

    def get_questions_by_interview(self, interview_id: int) -> List[Question]:
        questions = [q for q in self._questions.values() if q.interview_id == interview_id]
        return sorted(questions, key=lambda q: q.order)

    # ============ ANSWERS ============

    def create_answer(self, question_id: int, answer_text: str) -> Answer:
        with self._lock:
            if question_id in self._answer_by_question:
                raise DuplicateAnswerError(f"Question {question_id} already has an answer")
            question = self._questions.get(question_id)
            if question is not None and self._is_closed(question.interview_id):
                raise InterviewClosedError(f"Interview {question.interview_id} no longer accepts answers")
            answer = Answer(
                id=self._next_id("answers"),
                question_id=question_id,
                answer_text=answer_text,
            )
            self._answers[answer.id] = answer
            self._answer_by_question[question_id] = answer.id
        return answer

    def get_answer(self, answer_id: int) -> Optional[Answer]:
        return self._answers.get(answer_id)

    def get_answer_by_question(self, question_id: int) -> Optional[Answer]:
        answer_id = self._answer_by_question.get(question_id)
        if answer_id is None:
            return None
        return self._answers.get(answer_id)

    def update_answer(self, answer_id: int, **fields) -> Optional[Answer]:
        with self._lock:
            answer = self._answers.get(answer_id)
            if answer is None:
                return None
            updated = answer.model_copy(update=fields)
            self._answers[answer_id] = updated
        return updated

    def get_answers_by_interview(self, interview_id: int) -> List[Answer]:
        answers = []
        for question in self.get_questions_by_interview(interview_id):
            answer = self.get_answer_by_question(question.id)
            if answer is not None:
                answers.append(answer)
        return answers
