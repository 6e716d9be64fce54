"""
QuizAttempt: immutable log entry for one answered question.
"""

from dataclasses import dataclass

from nanobio.domain.common.value_objects import OptionLabel, QuestionId, UserId


@dataclass(frozen=True)
class QuizAttempt:
    """Append-only; attempts are never updated or deleted."""

    user_id: UserId
    question_id: QuestionId
    selected_option: OptionLabel
    is_correct: bool
