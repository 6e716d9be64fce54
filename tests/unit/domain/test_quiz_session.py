"""Tests for the QuizSession aggregate."""

import pytest

from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.catalog.entities.question import Question
from nanobio.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from nanobio.domain.common.value_objects import ModuleId, OptionLabel, QuestionId, UserId
from nanobio.domain.learning.entities.quiz_session import QuizSession, QuizState


def _question(id: str, correct: str) -> Question:
    return Question.create(
        id=QuestionId(id),
        topic="Topic",
        prompt=f"{id}?",
        option_a="A",
        option_b="B",
        option_c="C",
        option_d="D",
        correct_answer=correct,
    )


def _loaded(*correct: str) -> QuizSession:
    session = QuizSession(user_id=UserId("u"))
    module = Module(id=ModuleId("m"), title="Topic", slug="topic")
    session.load(module, [_question(f"q{i}", c) for i, c in enumerate(correct)])
    return session


def _answer(session: QuizSession, option: str) -> bool:
    session.select(option)
    correct = session.verify()
    session.mark_attempt_recorded()
    session.advance()
    return correct


class TestQuizSessionFlow:
    def test_full_run_scores_and_finishes(self) -> None:
        session = _loaded("a", "b", "c")
        assert _answer(session, "a") is True
        assert _answer(session, "b") is True
        assert _answer(session, "d") is False

        assert session.state is QuizState.FINISHED
        assert session.score == 2
        assert session.final_percentage == 67
        assert session.passed is False

    def test_perfect_run_passes(self) -> None:
        session = _loaded("a", "b", "c")
        for option in ("a", "b", "c"):
            _answer(session, option)
        snapshot = session.progress_snapshot()

        assert session.final_percentage == 100
        assert snapshot.completed is True
        assert snapshot.last_score == 100

    def test_no_questions_finishes_immediately(self) -> None:
        session = _loaded()
        assert session.state is QuizState.FINISHED
        assert session.final_percentage == 0
        assert session.progress_snapshot().completed is False

    def test_selection_can_change_before_verify(self) -> None:
        session = _loaded("c")
        session.select("a")
        session.select(OptionLabel("c"))
        assert session.verify() is True

    def test_mark_not_found(self) -> None:
        session = QuizSession(user_id=UserId("u"))
        session.mark_not_found()
        assert session.state is QuizState.NOT_FOUND
        assert session.is_terminal


class TestQuizSessionRules:
    def test_verify_without_selection(self) -> None:
        session = _loaded("a")
        with pytest.raises(ValidationError):
            session.verify()
        assert session.state is QuizState.ANSWERING
        assert session.score == 0

    def test_cannot_select_after_verify(self) -> None:
        session = _loaded("a", "b")
        session.select("a")
        session.verify()
        with pytest.raises(BusinessRuleViolationError):
            session.select("b")

    def test_cannot_advance_before_recording(self) -> None:
        session = _loaded("a", "b")
        session.select("a")
        session.verify()
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            session.advance()
        assert exc_info.value.rule == "write_before_advance"
        assert session.index == 0

    def test_score_bounded_by_question_count(self) -> None:
        session = _loaded("a", "a")
        for _ in range(2):
            _answer(session, "a")
        assert session.score == session.question_count

    def test_pending_attempt_matches_selection(self) -> None:
        session = _loaded("b")
        session.select("option_b")
        session.verify()
        attempt = session.pending_attempt()
        assert attempt.question_id == QuestionId("q0")
        assert attempt.selected_option == OptionLabel("b")
        assert attempt.is_correct is True

    def test_attempt_is_captured_on_verify(self) -> None:
        session = _loaded("a", "b")
        assert session.revealed_attempt is None

        session.select("c")
        session.verify()
        captured = session.revealed_attempt

        assert captured is not None
        assert session.pending_attempt() is captured
        assert (captured.selected_option, captured.is_correct) == (OptionLabel("c"), False)

        session.mark_attempt_recorded()
        session.advance()
        assert session.revealed_attempt is None
        with pytest.raises(BusinessRuleViolationError):
            session.pending_attempt()

    def test_load_only_once(self) -> None:
        session = _loaded("a")
        with pytest.raises(BusinessRuleViolationError):
            session.load(Module(id=ModuleId("m2"), title="Other", slug="other"), [])
