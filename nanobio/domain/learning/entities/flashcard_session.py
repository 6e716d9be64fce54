"""
FlashcardSession aggregate: sequential self-graded review of a deck.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from nanobio.domain.catalog.entities.key_term import KeyTerm
from nanobio.domain.common.exceptions import BusinessRuleViolationError


class CardFace(StrEnum):
    FRONT = "front"
    BACK = "back"


class DeckState(StrEnum):
    REVIEWING = "reviewing"
    COMPLETE = "complete"
    NO_CONTENT = "no_content"


class Grade(StrEnum):
    MASTERED = "mastered"
    REVIEW = "review"


@dataclass
class FlashcardSession:
    """
    Review state over a fixed deck.

    Business Rules:
    - Cards are shown in deck order, term first
    - Grading counts the card and moves to the next one, face reset to term
    - Counters only grow within a session
    - A completed deck is rewarded at most once per session object
    """

    cards: list[KeyTerm] = field(default_factory=list)
    cursor: int = 0
    face: CardFace = CardFace.FRONT
    mastered: int = 0
    reviewing: int = 0
    reward_granted: bool = False

    @property
    def state(self) -> DeckState:
        if not self.cards:
            return DeckState.NO_CONTENT
        if self.cursor >= len(self.cards):
            return DeckState.COMPLETE
        return DeckState.REVIEWING

    @property
    def current_card(self) -> KeyTerm | None:
        if self.state is DeckState.REVIEWING:
            return self.cards[self.cursor]
        return None

    @property
    def visible_text(self) -> str | None:
        """Term on the front, definition on the back."""
        card = self.current_card
        if card is None:
            return None
        return card.term if self.face is CardFace.FRONT else card.definition

    @property
    def remaining(self) -> int:
        return max(len(self.cards) - self.cursor, 0)

    @property
    def awaiting_reward(self) -> bool:
        return self.state is DeckState.COMPLETE and not self.reward_granted

    def flip(self) -> CardFace:
        self._require_reviewing("flip_while_reviewing")
        self.face = CardFace.BACK if self.face is CardFace.FRONT else CardFace.FRONT
        return self.face

    def grade(self, grade: Grade | str) -> DeckState:
        """Count the current card as mastered or needing review, then advance."""
        self._require_reviewing("grade_while_reviewing")
        if Grade(grade) is Grade.MASTERED:
            self.mastered += 1
        else:
            self.reviewing += 1
        self.cursor += 1
        self.face = CardFace.FRONT
        return self.state

    def mark_rewarded(self) -> None:
        if not self.awaiting_reward:
            raise BusinessRuleViolationError("reward_once", "Deck is not awaiting a reward")
        self.reward_granted = True

    def _require_reviewing(self, rule: str) -> None:
        if self.state is not DeckState.REVIEWING:
            raise BusinessRuleViolationError(
                rule, f"Flashcard session is {self.state.value}, expected reviewing"
            )
