"""
ModuleProgress entity: one user's standing on one module.
"""

from dataclasses import dataclass
from datetime import datetime

from nanobio.constants import PASS_THRESHOLD
from nanobio.domain.common.exceptions import ValidationError
from nanobio.domain.common.value_objects import ModuleId, UserId

MAX_PERCENT = 100


def _check_percent(name: str, value: int | None) -> None:
    if value is not None and not 0 <= value <= MAX_PERCENT:
        raise ValidationError(f"{name} must be between 0 and 100", field=name, value=value)


@dataclass
class ModuleProgress:
    """
    Progress record keyed by (user, module).

    Business Rules:
    - progress and last_score are percentages in [0, 100]
    - completed is true only when last_score passed the threshold, or the
      module was explicitly marked complete
    - Records are created on first access and never deleted
    """

    user_id: UserId
    module_id: ModuleId
    completed: bool = False
    progress: int = 0
    last_score: int | None = None
    last_opened: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        _check_percent("progress", self.progress)
        _check_percent("last_score", self.last_score)

    @property
    def key(self) -> tuple[UserId, ModuleId]:
        return (self.user_id, self.module_id)

    @staticmethod
    def passes(score: int) -> bool:
        """Whether a final quiz percentage meets the pass threshold."""
        return score >= PASS_THRESHOLD

    def record_quiz_score(self, score: int) -> None:
        """Store a finished quiz's percentage and the pass/fail outcome it implies."""
        _check_percent("last_score", score)
        self.last_score = score
        self.completed = self.passes(score)

    def mark_complete(self) -> None:
        """Explicit completion outside the quiz flow."""
        self.completed = True
        self.progress = MAX_PERCENT

    def touch(self, opened_at: datetime) -> None:
        self.last_opened = opened_at

    @classmethod
    def for_quiz_result(cls, user_id: UserId, module_id: ModuleId, score: int) -> "ModuleProgress":
        """Progress snapshot produced by finishing a quiz session."""
        progress = cls(user_id=user_id, module_id=module_id)
        progress.record_quiz_score(score)
        return progress
