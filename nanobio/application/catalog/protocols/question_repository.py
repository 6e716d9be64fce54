from typing import Protocol

from nanobio.domain.catalog.entities.question import Question


class QuestionRepositoryProtocol(Protocol):
    async def find_by_topic(self, topic: str) -> list[Question]: ...
