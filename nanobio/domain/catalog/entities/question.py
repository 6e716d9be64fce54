"""
Question entity for four-option quizzes.
"""

from dataclasses import dataclass

from nanobio.domain.common.entity import Entity
from nanobio.domain.common.exceptions import ValidationError
from nanobio.domain.common.value_objects import OptionLabel, QuestionId


@dataclass(eq=False)
class Question(Entity[QuestionId]):
    """
    A quiz question belonging to one topic (the module title).

    Business Rules:
    - Prompt cannot be empty
    - Exactly four options, keyed a-d
    - The correct option is one of the four labels
    """

    id: QuestionId
    topic: str
    prompt: str
    options: dict[OptionLabel, str]
    correct_option: OptionLabel
    explanation: str = ""
    difficulty: int = 1

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.prompt or not self.prompt.strip():
            raise ValidationError("Question prompt cannot be empty", field="prompt")
        labels = {label.value for label in self.options}
        if labels != set(OptionLabel.LABELS):
            raise ValidationError(
                "Question must have exactly the options a-d", field="options", value=sorted(labels)
            )

    def is_correct(self, selected: OptionLabel) -> bool:
        """Exact match against the correct option; there is no partial credit."""
        return selected == self.correct_option

    @classmethod
    def create(
        cls,
        id: QuestionId,
        topic: str,
        prompt: str,
        option_a: str,
        option_b: str,
        option_c: str,
        option_d: str,
        correct_answer: str,
        explanation: str = "",
        difficulty: int = 1,
    ) -> "Question":
        """Build a question from the flat option columns of a stored row."""
        return cls(
            id=id,
            topic=topic,
            prompt=prompt,
            options={
                OptionLabel("a"): option_a,
                OptionLabel("b"): option_b,
                OptionLabel("c"): option_c,
                OptionLabel("d"): option_d,
            },
            correct_option=OptionLabel.parse(correct_answer),
            explanation=explanation,
            difficulty=difficulty,
        )
