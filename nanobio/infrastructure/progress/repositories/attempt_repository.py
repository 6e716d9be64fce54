"""Repository for the append-only quiz attempt log."""

import structlog

from nanobio.application.common.protocols import RecordStoreProtocol
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progress.entities.quiz_attempt import QuizAttempt
from nanobio.infrastructure.progress.mappers.attempt_mapper import AttemptMapper

logger = structlog.get_logger(__name__)

ATTEMPTS_TABLE = "user_quiz_attempts"


class AttemptRepository:
    """Append-only access to user_quiz_attempts."""

    def __init__(self, store: RecordStoreProtocol) -> None:
        self.store = store
        self.mapper = AttemptMapper()

    async def add(self, attempt: QuizAttempt) -> None:
        await self.store.insert(ATTEMPTS_TABLE, self.mapper.to_record(attempt))
        logger.debug(
            "quiz_attempt_recorded",
            user_id=attempt.user_id.value,
            question_id=attempt.question_id.value,
            is_correct=attempt.is_correct,
        )

    async def find_by_user(self, user_id: UserId) -> list[QuizAttempt]:
        records = await self.store.select(
            ATTEMPTS_TABLE, {"user_id": user_id.value}, order_by="id"
        )
        return [self.mapper.to_domain(record) for record in records]
