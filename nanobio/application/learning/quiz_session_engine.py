"""Quiz session engine: drives a QuizSession against the record store."""

import structlog

from nanobio.application.catalog.protocols import (
    ModuleRepositoryProtocol,
    QuestionRepositoryProtocol,
)
from nanobio.application.progress.protocols import (
    AttemptRepositoryProtocol,
    ProgressRepositoryProtocol,
)
from nanobio.domain.common.exceptions import BusinessRuleViolationError
from nanobio.domain.common.value_objects import OptionLabel, UserId
from nanobio.domain.learning.entities.quiz_session import QuizSession, QuizState
from nanobio.domain.progress.entities.module_progress import ModuleProgress

logger = structlog.get_logger(__name__)


class QuizSessionEngine:
    """
    One quiz run for one (user, module) pair.

    Every store write is awaited before the session moves on: the attempt
    for question i is persisted before question i+1 is shown, and the
    progress upsert happens before the session reports FINISHED. A failed
    write propagates and leaves the session where it was.
    """

    def __init__(
        self,
        user_id: UserId,
        module_repository: ModuleRepositoryProtocol,
        question_repository: QuestionRepositoryProtocol,
        attempt_repository: AttemptRepositoryProtocol,
        progress_repository: ProgressRepositoryProtocol,
    ) -> None:
        self.module_repository = module_repository
        self.question_repository = question_repository
        self.attempt_repository = attempt_repository
        self.progress_repository = progress_repository
        self.session = QuizSession(user_id=user_id)

    @property
    def state(self) -> QuizState:
        return self.session.state

    async def start(self, slug: str) -> QuizSession:
        """
        Load the module and its questions, easiest first.

        An unknown slug ends in the NOT_FOUND state instead of raising. A
        module without questions finishes immediately with a score of 0.
        """
        module = await self.module_repository.find_by_slug(slug)
        if module is None:
            self.session.mark_not_found()
            logger.info("quiz_module_not_found", slug=slug)
            return self.session

        questions = await self.question_repository.find_by_topic(module.title)
        self.session.load(module, questions)
        logger.info(
            "quiz_session_started",
            user_id=self.session.user_id.value,
            module_id=module.id.value,
            question_count=len(questions),
        )

        if self.session.state is QuizState.FINISHED:
            await self._save_result()
        return self.session

    def select(self, option: OptionLabel | str) -> None:
        self.session.select(option)

    def verify(self) -> bool:
        """Score the current selection; raises ValidationError when nothing is selected."""
        return self.session.verify()

    async def advance(self) -> QuizSession:
        """
        Record the verified attempt, then move on.

        On the last question the progress upsert must also succeed before
        the session becomes FINISHED. Retrying after a failed upsert does
        not write the attempt a second time.
        """
        session = self.session
        if session.state is not QuizState.REVEALED:
            raise BusinessRuleViolationError(
                "advance_after_verify", f"Quiz session is {session.state.value}, expected revealed"
            )

        if not session.attempt_recorded:
            attempt = session.pending_attempt()
            await self.attempt_repository.add(attempt)
            session.mark_attempt_recorded()
            logger.debug(
                "quiz_attempt_recorded",
                user_id=attempt.user_id.value,
                question_id=attempt.question_id.value,
                is_correct=attempt.is_correct,
            )

        if session.is_last_question:
            await self._save_result()
        session.advance()
        return session

    async def finish(self) -> ModuleProgress:
        """
        Re-issue the final progress upsert of a finished session.

        The write is idempotent and no attempts are recorded again.
        """
        if self.session.state is not QuizState.FINISHED:
            raise BusinessRuleViolationError(
                "finish_when_finished",
                f"Quiz session is {self.session.state.value}, expected finished",
            )
        return await self._save_result()

    async def _save_result(self) -> ModuleProgress:
        progress = self.session.progress_snapshot()
        saved = await self.progress_repository.save_quiz_result(progress)
        logger.info(
            "quiz_session_finished",
            user_id=progress.user_id.value,
            module_id=progress.module_id.value,
            score=self.session.score,
            final_percentage=progress.last_score,
            completed=progress.completed,
        )
        return saved
