"""Common value objects shared across all domain modules."""

from .ids import KeyTermId, ModuleId, QuestionId, UserId
from .option_label import OptionLabel

__all__ = [
    "KeyTermId",
    "ModuleId",
    "OptionLabel",
    "QuestionId",
    "UserId",
]
