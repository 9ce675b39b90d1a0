"""
In-memory store tests
"""

import pytest

from services.database import (
    InMemoryDatabase, DuplicateAnswerError, DuplicateUsernameError, InterviewClosedError,
)


def _interview(db, **overrides):
    fields = {
        "job_role": "Data Analyst",
        "experience_level": "junior",
        "include_technical": True,
        "include_behavioral": True,
        "include_company_specific": False,
        "interview_length": "short",
    }
    fields.update(overrides)
    return db.create_interview(**fields)


class TestIdentifiers:

    def test_ids_increase_per_entity_type(self, db):
        # Given / When
        first = _interview(db)
        second = _interview(db)
        question = db.create_question(first.id, "technical", "Q1", 0)

        # Then
        assert first.id == 1
        assert second.id == 2
        assert question.id == 1

    def test_instances_are_isolated(self):
        one = InMemoryDatabase()
        other = InMemoryDatabase()

        _interview(one)

        assert one.get_interview(1) is not None
        assert other.get_interview(1) is None


class TestInterviews:

    def test_create_sets_start_time_and_empty_report(self, db):
        interview = _interview(db)

        assert interview.start_time is not None
        assert interview.end_time is None
        assert interview.readiness_score is None
        assert interview.category_scores is None
        assert not interview.is_completed

    def test_update_replaces_fields(self, db):
        interview = _interview(db)

        updated = db.update_interview(interview.id, readiness_score=88, strengths=["clear"])

        assert updated.readiness_score == 88
        assert db.get_interview(interview.id).strengths == ["clear"]

    def test_update_unknown_id_returns_none(self, db):
        assert db.update_interview(999, readiness_score=50) is None

    def test_list_filters_by_owner_newest_first(self, db):
        older = _interview(db, user_id=1)
        _interview(db, user_id=2)
        newer = _interview(db, user_id=1)

        result = db.list_interviews(user_id=1)

        assert [i.id for i in result] == [newer.id, older.id]
        assert len(db.list_interviews()) == 3


class TestQuestionsAndAnswers:

    def test_questions_are_returned_in_order(self, db):
        interview = _interview(db)
        db.create_question(interview.id, "behavioral", "second", 1)
        db.create_question(interview.id, "technical", "first", 0)
        db.create_question(_interview(db).id, "technical", "other interview", 0)

        questions = db.get_questions_by_interview(interview.id)

        assert [q.text for q in questions] == ["first", "second"]
        assert [q.order for q in questions] == [0, 1]

    def test_second_answer_for_question_is_rejected(self, db):
        interview = _interview(db)
        question = db.create_question(interview.id, "technical", "Q", 0)
        first = db.create_answer(question.id, "first answer")

        with pytest.raises(DuplicateAnswerError):
            db.create_answer(question.id, "second answer")

        assert db.get_answer_by_question(question.id) == first

    def test_update_answer_attaches_feedback(self, db):
        interview = _interview(db)
        question = db.create_question(interview.id, "technical", "Q", 0)
        answer = db.create_answer(question.id, "text")

        updated = db.update_answer(answer.id, score=81, feedback="Good", strengths=["a"], weaknesses=["b"])

        assert updated.score == 81
        assert db.get_answer(answer.id).feedback == "Good"
        assert db.update_answer(999, score=1) is None

    def test_answers_by_interview_join_through_questions(self, db):
        interview = _interview(db)
        other = _interview(db)
        q0 = db.create_question(interview.id, "technical", "Q0", 0)
        q1 = db.create_question(interview.id, "technical", "Q1", 1)
        q_other = db.create_question(other.id, "technical", "Q", 0)
        a1 = db.create_answer(q1.id, "answer 1")
        db.create_answer(q_other.id, "elsewhere")
        a0 = db.create_answer(q0.id, "answer 0")

        answers = db.get_answers_by_interview(interview.id)

        assert [a.id for a in answers] == [a0.id, a1.id]


class TestUsers:

    def test_usernames_are_unique(self, db):
        db.create_user("alice", "hash")

        with pytest.raises(DuplicateUsernameError):
            db.create_user("alice", "other")

        assert db.get_user_by_username("alice").id == 1
        assert db.get_user_by_username("bob") is None


class TestCompletion:

    def test_complete_writes_report_once(self, db):
        # Given
        interview = _interview(db)

        # When
        first = db.complete_interview(interview.id, readiness_score=81, strengths=["a"])
        second = db.complete_interview(interview.id, readiness_score=12, strengths=["b"])

        # Then
        assert first.end_time is not None
        assert second is None
        stored = db.get_interview(interview.id)
        assert stored.readiness_score == 81
        assert stored.strengths == ["a"]

    def test_complete_unknown_id_returns_none(self, db):
        assert db.complete_interview(404, readiness_score=1) is None

    def test_only_one_claim_at_a_time(self, db):
        interview = _interview(db)

        assert db.begin_completion(interview.id) is True
        assert db.begin_completion(interview.id) is False

        db.release_completion(interview.id)
        assert db.begin_completion(interview.id) is True

    def test_completed_interview_cannot_be_claimed(self, db):
        interview = _interview(db)
        db.complete_interview(interview.id, readiness_score=70)

        assert db.begin_completion(interview.id) is False
        assert db.begin_completion(999) is False

    def test_answers_refused_while_claimed_or_completed(self, db):
        interview = _interview(db)
        q0 = db.create_question(interview.id, "technical", "Q0", 0)
        q1 = db.create_question(interview.id, "technical", "Q1", 1)
        db.begin_completion(interview.id)

        with pytest.raises(InterviewClosedError):
            db.create_answer(q0.id, "during report")

        db.complete_interview(interview.id, readiness_score=70)

        assert db.is_interview_closed(interview.id)
        with pytest.raises(InterviewClosedError):
            db.create_answer(q1.id, "after report")
        assert db.get_answers_by_interview(interview.id) == []

    def test_delete_removes_interview_and_questions(self, db):
        interview = _interview(db)
        kept = _interview(db)
        question = db.create_question(interview.id, "technical", "Q", 0)
        other = db.create_question(kept.id, "technical", "Q", 0)

        assert db.delete_interview(interview.id) is True

        assert db.get_interview(interview.id) is None
        assert db.get_question(question.id) is None
        assert db.get_question(other.id) == other
        assert db.delete_interview(interview.id) is False
