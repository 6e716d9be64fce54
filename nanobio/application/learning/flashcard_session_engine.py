"""Flashcard session engine: deck review with a one-time experience reward."""

import structlog

from nanobio.application.catalog.protocols import KeyTermRepositoryProtocol
from nanobio.application.progression.ledger import ProgressionLedger
from nanobio.constants import FLASHCARD_DECK_XP
from nanobio.domain.common.value_objects import ModuleId
from nanobio.domain.learning.entities.flashcard_session import (
    CardFace,
    DeckState,
    FlashcardSession,
    Grade,
)

logger = structlog.get_logger(__name__)


class FlashcardSessionEngine:
    """Runs one review of a key-term deck and rewards its completion once."""

    def __init__(
        self,
        ledger: ProgressionLedger,
        key_term_repository: KeyTermRepositoryProtocol,
        reward: int = FLASHCARD_DECK_XP,
    ) -> None:
        self.ledger = ledger
        self.key_term_repository = key_term_repository
        self.reward = reward
        self.session = FlashcardSession()

    @property
    def state(self) -> DeckState:
        return self.session.state

    async def start(self, module_id: ModuleId | None = None) -> FlashcardSession:
        """Load every key term, or only those of one module."""
        if module_id is None:
            cards = await self.key_term_repository.find_all()
        else:
            cards = await self.key_term_repository.find_by_module(module_id)
        self.session = FlashcardSession(cards=cards)
        logger.info(
            "flashcard_session_started",
            user_id=self.ledger.user_id.value,
            module_id=module_id.value if module_id else None,
            card_count=len(cards),
        )
        return self.session

    def flip(self) -> CardFace:
        return self.session.flip()

    async def grade(self, grade: Grade | str) -> DeckState:
        """Grade the current card; grading the last card completes the deck."""
        state = self.session.grade(grade)
        if state is DeckState.COMPLETE:
            await self.complete()
        return state

    async def complete(self) -> bool:
        """
        Award the deck reward if it is still owed.

        Returns:
            True if this call issued the award, False if nothing was owed

        Raises:
            StoreFailureError: If the award fails; the reward stays owed
        """
        if not self.session.awaiting_reward:
            return False
        await self.ledger.award_experience(self.reward)
        self.session.mark_rewarded()
        logger.info(
            "flashcard_deck_completed",
            user_id=self.ledger.user_id.value,
            mastered=self.session.mastered,
            reviewing=self.session.reviewing,
            reward=self.reward,
        )
        return True
