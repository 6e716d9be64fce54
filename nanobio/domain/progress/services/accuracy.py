"""Historical answer accuracy."""

from collections.abc import Iterable

from nanobio.domain.common.percentage import round_half_up_percentage
from nanobio.domain.progress.entities.quiz_attempt import QuizAttempt


def accuracy_percentage(attempts: Iterable[QuizAttempt]) -> int:
    """Share of correct attempts over the full history; 0 with no attempts."""
    total = 0
    correct = 0
    for attempt in attempts:
        total += 1
        if attempt.is_correct:
            correct += 1
    return round_half_up_percentage(correct, total)
