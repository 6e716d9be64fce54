"""In-process registry of live quiz and flashcard sessions."""

import asyncio
from collections.abc import Callable

import structlog

from nanobio.application.learning.flashcard_session_engine import FlashcardSessionEngine
from nanobio.application.learning.quiz_session_engine import QuizSessionEngine
from nanobio.application.progression.ledger import ProgressionLedger
from nanobio.domain.common.value_objects import ModuleId, UserId
from nanobio.domain.progression.entities.profile import Profile
from nanobio.exceptions import LearningSessionNotFoundError

logger = structlog.get_logger(__name__)


class LearningSessionRegistry:
    """
    Holds each user's live sessions between requests.

    A user has at most one quiz and one flashcard session; starting a new
    one replaces the old. Each user also gets one progression ledger, which
    follows the change feed until the registry is closed. ``guard`` gives a
    per-user lock so a session only ever sees one request at a time.
    """

    def __init__(
        self,
        ledger_factory: Callable[..., ProgressionLedger],
        quiz_engine_factory: Callable[..., QuizSessionEngine],
        flashcard_engine_factory: Callable[..., FlashcardSessionEngine],
    ) -> None:
        self.ledger_factory = ledger_factory
        self.quiz_engine_factory = quiz_engine_factory
        self.flashcard_engine_factory = flashcard_engine_factory
        self._ledgers: dict[UserId, ProgressionLedger] = {}
        self._quizzes: dict[UserId, QuizSessionEngine] = {}
        self._flashcards: dict[UserId, FlashcardSessionEngine] = {}
        self._locks: dict[UserId, asyncio.Lock] = {}

    def guard(self, user_id: UserId) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        return lock

    # Progression

    def ledger(self, user_id: UserId) -> ProgressionLedger:
        """The user's ledger, created and subscribed on first use."""
        ledger = self._ledgers.get(user_id)
        if ledger is None:
            ledger = self.ledger_factory(user_id=user_id)
            if ledger.change_feed is not None:
                ledger.start()
            self._ledgers[user_id] = ledger
        return ledger

    async def progression(self, user_id: UserId) -> Profile:
        """
        The ledger's live view, read from the store the first time.

        Raises:
            ProfileNotFoundError: If the user has no profile
            StoreFailureError: If the first read fails
        """
        ledger = self.ledger(user_id)
        if ledger.profile is not None:
            return ledger.profile
        return await ledger.load()

    # Quiz sessions

    async def start_quiz(self, user_id: UserId, slug: str) -> QuizSessionEngine:
        """
        Start a quiz on the module with this slug.

        An unknown slug returns the engine in its NOT_FOUND state without
        registering it, so the user's previous quiz stays available.
        """
        engine = self.quiz_engine_factory(user_id=user_id)
        session = await engine.start(slug)
        if session.module is not None:
            self._quizzes[user_id] = engine
        return engine

    def quiz(self, user_id: UserId) -> QuizSessionEngine:
        engine = self._quizzes.get(user_id)
        if engine is None:
            raise LearningSessionNotFoundError("quiz")
        return engine

    # Flashcard sessions

    async def start_flashcards(
        self, user_id: UserId, module_id: ModuleId | None = None
    ) -> FlashcardSessionEngine:
        """Start reviewing every key term, or those of one module."""
        engine = self.flashcard_engine_factory(ledger=self.ledger(user_id))
        await engine.start(module_id)
        self._flashcards[user_id] = engine
        return engine

    def flashcards(self, user_id: UserId) -> FlashcardSessionEngine:
        engine = self._flashcards.get(user_id)
        if engine is None:
            raise LearningSessionNotFoundError("flashcard")
        return engine

    async def close(self) -> None:
        """Stop every ledger listener and forget all sessions."""
        for ledger in self._ledgers.values():
            await ledger.stop()
        logger.info(
            "learning_sessions_closed",
            ledgers=len(self._ledgers),
            quizzes=len(self._quizzes),
            flashcards=len(self._flashcards),
        )
        self._ledgers.clear()
        self._quizzes.clear()
        self._flashcards.clear()
        self._locks.clear()
