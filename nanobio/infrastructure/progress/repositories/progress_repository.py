"""Repository for ModuleProgress domain entities."""

from operator import attrgetter

from nanobio.application.common.protocols import RecordStoreProtocol
from nanobio.domain.common.value_objects import ModuleId, UserId
from nanobio.domain.progress.entities.module_progress import ModuleProgress
from nanobio.infrastructure.progress.mappers.progress_mapper import ProgressMapper

PROGRESS_TABLE = "module_progress"
PROGRESS_KEY = ("user_id", "module_id")


class ProgressRepository:
    """
    Per-user module progress.

    Each save method upserts only the columns its flow owns, so a quiz
    result never resets ``last_opened`` and opening a lecture never clears
    a score.
    """

    def __init__(self, store: RecordStoreProtocol) -> None:
        self.store = store
        self.mapper = ProgressMapper()

    async def find_by_user(self, user_id: UserId) -> list[ModuleProgress]:
        records = await self.store.select(PROGRESS_TABLE, {"user_id": user_id.value})
        return [self.mapper.to_domain(record) for record in records]

    async def find(self, user_id: UserId, module_id: ModuleId) -> ModuleProgress | None:
        records = await self.store.select(
            PROGRESS_TABLE, {"user_id": user_id.value, "module_id": module_id.value}, limit=1
        )
        return self.mapper.to_domain(records[0]) if records else None

    async def find_completed_module_ids(self, user_id: UserId) -> set[ModuleId]:
        """
        Get the ids of the modules a user has completed.

        Returns:
            Set of module ids; duplicates in storage collapse
        """
        records = await self.store.select(
            PROGRESS_TABLE, {"user_id": user_id.value, "completed": True}, columns=["module_id"]
        )
        return {ModuleId(str(record["module_id"])) for record in records}

    async def count_completed(self, user_id: UserId) -> int:
        return await self.store.count(PROGRESS_TABLE, {"user_id": user_id.value, "completed": True})

    async def find_most_recent(self, user_id: UserId) -> ModuleProgress | None:
        """
        Find the most recently opened module for a user.

        Rows that were never opened are skipped; backends disagree on
        where NULLs sort.
        """
        opened = [p for p in await self.find_by_user(user_id) if p.last_opened is not None]
        return max(opened, key=attrgetter("last_opened"), default=None)

    async def save_quiz_result(self, progress: ModuleProgress) -> ModuleProgress:
        record = await self.store.upsert(
            PROGRESS_TABLE, self.mapper.quiz_result_record(progress), PROGRESS_KEY
        )
        return self.mapper.to_domain(record)

    async def save_completion(self, progress: ModuleProgress) -> ModuleProgress:
        record = await self.store.upsert(
            PROGRESS_TABLE, self.mapper.completion_record(progress), PROGRESS_KEY
        )
        return self.mapper.to_domain(record)

    async def save_opened(self, progress: ModuleProgress) -> ModuleProgress:
        record = await self.store.upsert(
            PROGRESS_TABLE, self.mapper.opened_record(progress), PROGRESS_KEY
        )
        return self.mapper.to_domain(record)
