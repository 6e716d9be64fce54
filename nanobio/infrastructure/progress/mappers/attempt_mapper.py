"""Mapper for user_quiz_attempts rows ↔ QuizAttempt values."""

from typing import Any

from nanobio.domain.common.value_objects import OptionLabel, QuestionId, UserId
from nanobio.domain.progress.entities.quiz_attempt import QuizAttempt


class AttemptMapper:
    """Mapper for user_quiz_attempts rows ↔ QuizAttempt values."""

    def to_domain(self, record: dict[str, Any]) -> QuizAttempt:
        return QuizAttempt(
            user_id=UserId(str(record["user_id"])),
            question_id=QuestionId(str(record["question_id"])),
            selected_option=OptionLabel.parse(record["selected_option"]),
            is_correct=bool(record["is_correct"]),
        )

    def to_record(self, attempt: QuizAttempt) -> dict[str, Any]:
        return {
            "user_id": attempt.user_id.value,
            "question_id": attempt.question_id.value,
            "selected_option": attempt.selected_option.value,
            "is_correct": attempt.is_correct,
        }
