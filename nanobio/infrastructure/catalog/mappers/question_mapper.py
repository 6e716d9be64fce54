"""Mapper for question rows ↔ Question entities."""

from typing import Any

from nanobio.domain.catalog.entities.question import Question
from nanobio.domain.common.value_objects import QuestionId


class QuestionMapper:
    """Mapper for question rows ↔ Question entities."""

    def to_domain(self, record: dict[str, Any]) -> Question:
        """Convert a stored row to a domain entity."""
        return Question.create(
            id=QuestionId(str(record["id"])),
            topic=record["topic"],
            prompt=record["question"],
            option_a=record["option_a"],
            option_b=record["option_b"],
            option_c=record["option_c"],
            option_d=record["option_d"],
            correct_answer=record["correct_answer"],
            explanation=record.get("explanation") or "",
            difficulty=int(record.get("difficulty") or 1),
        )
