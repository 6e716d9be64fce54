"""
Module entity: one lesson of the curriculum catalog.
"""

from dataclasses import dataclass

from nanobio.domain.common.entity import Entity
from nanobio.domain.common.exceptions import ValidationError
from nanobio.domain.common.value_objects import ModuleId

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 3

TIER_LABELS = {1: "Foundation", 2: "Intermediate"}
DEFAULT_TIER_LABEL = "Advanced"


@dataclass(eq=False)
class Module(Entity[ModuleId]):
    """
    Read-only catalog entry.

    Business Rules:
    - Title and slug cannot be empty
    - Difficulty is an ordinal tier, clamped into 1-3 on read
    - Domain is optional; grouping falls back to a sentinel label
    """

    id: ModuleId
    title: str
    slug: str
    difficulty: int = MIN_DIFFICULTY
    estimated_minutes: int = 0
    domain: str | None = None
    description: str | None = None
    content: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Module title cannot be empty", field="title")
        if not self.slug or not self.slug.strip():
            raise ValidationError("Module slug cannot be empty", field="slug")
        self.difficulty = min(max(self.difficulty, MIN_DIFFICULTY), MAX_DIFFICULTY)
        self.estimated_minutes = max(self.estimated_minutes, 0)

    @property
    def tier_label(self) -> str:
        """Human label for the difficulty tier."""
        return TIER_LABELS.get(self.difficulty, DEFAULT_TIER_LABEL)
