"""Answer option label for four-option questions."""

from dataclasses import dataclass
from typing import ClassVar

from ..exceptions import ValidationError
from ..value_object import ValueObject


@dataclass(frozen=True)
class OptionLabel(ValueObject):
    """
    One of the four option labels ``a``-``d``.

    Stored data sometimes carries the column name instead of the letter
    (``option_b``); ``parse`` accepts both spellings in any case.
    """

    LABELS: ClassVar[tuple[str, ...]] = ("a", "b", "c", "d")

    value: str

    def __post_init__(self) -> None:
        if self.value not in self.LABELS:
            raise ValidationError("Unknown option label", field="option", value=self.value)

    @classmethod
    def parse(cls, raw: str) -> "OptionLabel":
        """Normalise ``A``, ``a`` or ``option_a`` to ``OptionLabel("a")``."""
        text = (raw or "").strip().lower()
        if text.startswith("option_"):
            text = text.removeprefix("option_")
        return cls(text)

    def __str__(self) -> str:
        return self.value
