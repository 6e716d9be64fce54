"""Repository for Question domain entities."""

from nanobio.application.common.protocols import RecordStoreProtocol
from nanobio.domain.catalog.entities.question import Question
from nanobio.infrastructure.catalog.mappers.question_mapper import QuestionMapper

QUESTIONS_TABLE = "questions"


class QuestionRepository:
    """Read-only access to quiz questions."""

    def __init__(self, store: RecordStoreProtocol) -> None:
        self.store = store
        self.mapper = QuestionMapper()

    async def find_by_topic(self, topic: str) -> list[Question]:
        """
        Get the questions for a topic (a module title).

        Returns:
            List of question entities ordered by difficulty ascending
        """
        records = await self.store.select(QUESTIONS_TABLE, {"topic": topic}, order_by="difficulty")
        return [self.mapper.to_domain(record) for record in records]
