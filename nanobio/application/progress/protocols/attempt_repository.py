from typing import Protocol

from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progress.entities.quiz_attempt import QuizAttempt


class AttemptRepositoryProtocol(Protocol):
    async def add(self, attempt: QuizAttempt) -> None: ...

    async def find_by_user(self, user_id: UserId) -> list[QuizAttempt]: ...
