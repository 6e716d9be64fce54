"""Tests for the registry of live learning sessions."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from nanobio.application.learning.flashcard_session_engine import FlashcardSessionEngine
from nanobio.application.learning.quiz_session_engine import QuizSessionEngine
from nanobio.application.learning.session_registry import LearningSessionRegistry
from nanobio.application.progression.ledger import ProgressionLedger
from nanobio.constants import FLASHCARD_DECK_XP
from nanobio.domain.common.value_objects import ModuleId, UserId
from nanobio.domain.learning.entities.flashcard_session import DeckState, Grade
from nanobio.domain.learning.entities.quiz_session import QuizState
from nanobio.exceptions import LearningSessionNotFoundError
from nanobio.infrastructure.catalog.repositories.key_term_repository import KeyTermRepository
from nanobio.infrastructure.catalog.repositories.module_repository import ModuleRepository
from nanobio.infrastructure.catalog.repositories.question_repository import QuestionRepository
from nanobio.infrastructure.progress.repositories.attempt_repository import AttemptRepository
from nanobio.infrastructure.progress.repositories.progress_repository import ProgressRepository
from nanobio.infrastructure.progression.repositories.profile_repository import ProfileRepository
from nanobio.infrastructure.store import InMemoryChangeFeed, SqlRecordStore
from tests.conftest import OTHER_USER_ID


@pytest_asyncio.fixture
async def registry(
    seeded_store: SqlRecordStore, change_feed: InMemoryChangeFeed
) -> AsyncGenerator[LearningSessionRegistry, None]:
    def ledger_factory(user_id: UserId) -> ProgressionLedger:
        return ProgressionLedger(user_id, ProfileRepository(seeded_store), change_feed)

    def quiz_engine_factory(user_id: UserId) -> QuizSessionEngine:
        return QuizSessionEngine(
            user_id,
            ModuleRepository(seeded_store),
            QuestionRepository(seeded_store),
            AttemptRepository(seeded_store),
            ProgressRepository(seeded_store),
        )

    def flashcard_engine_factory(ledger: ProgressionLedger) -> FlashcardSessionEngine:
        return FlashcardSessionEngine(ledger, KeyTermRepository(seeded_store))

    sessions = LearningSessionRegistry(
        ledger_factory, quiz_engine_factory, flashcard_engine_factory
    )
    yield sessions
    await sessions.close()


class TestQuizSessions:
    @pytest.mark.asyncio
    async def test_started_quiz_is_kept_per_user(
        self, registry: LearningSessionRegistry, user_id: UserId
    ) -> None:
        engine = await registry.start_quiz(user_id, "atomic-layer-deposition")

        assert engine.state is QuizState.ANSWERING
        assert registry.quiz(user_id) is engine
        with pytest.raises(LearningSessionNotFoundError):
            registry.quiz(UserId(OTHER_USER_ID))

    @pytest.mark.asyncio
    async def test_unknown_slug_keeps_previous_quiz(
        self, registry: LearningSessionRegistry, user_id: UserId
    ) -> None:
        engine = await registry.start_quiz(user_id, "atomic-layer-deposition")

        missing = await registry.start_quiz(user_id, "missing")

        assert missing.state is QuizState.NOT_FOUND
        assert registry.quiz(user_id) is engine

    @pytest.mark.asyncio
    async def test_new_quiz_replaces_old(
        self, registry: LearningSessionRegistry, user_id: UserId
    ) -> None:
        await registry.start_quiz(user_id, "atomic-layer-deposition")
        replacement = await registry.start_quiz(user_id, "crispr-delivery")
        assert registry.quiz(user_id) is replacement


class TestFlashcardSessions:
    @pytest.mark.asyncio
    async def test_deck_award_reaches_shared_ledger(
        self, registry: LearningSessionRegistry, user_id: UserId
    ) -> None:
        engine = await registry.start_flashcards(user_id, ModuleId("m-ald"))
        for _ in range(3):
            await engine.grade(Grade.MASTERED)

        assert engine.state is DeckState.COMPLETE
        assert engine.ledger is registry.ledger(user_id)
        assert (await registry.progression(user_id)).xp == FLASHCARD_DECK_XP

    @pytest.mark.asyncio
    async def test_missing_review(self, registry: LearningSessionRegistry, user_id: UserId) -> None:
        with pytest.raises(LearningSessionNotFoundError):
            registry.flashcards(user_id)


class TestProgression:
    @pytest.mark.asyncio
    async def test_ledger_follows_external_writes(
        self,
        registry: LearningSessionRegistry,
        seeded_store: SqlRecordStore,
        user_id: UserId,
    ) -> None:
        ledger = registry.ledger(user_id)
        assert (await registry.progression(user_id)).streak == 0

        await seeded_store.update("profiles", {"id": user_id.value}, {"streak": 4})
        await registry.close()

        assert ledger.profile is not None
        assert ledger.profile.streak == 4

    @pytest.mark.asyncio
    async def test_one_ledger_per_user(
        self, registry: LearningSessionRegistry, user_id: UserId
    ) -> None:
        assert registry.ledger(user_id) is registry.ledger(user_id)
        assert registry.ledger(user_id) is not registry.ledger(UserId(OTHER_USER_ID))
