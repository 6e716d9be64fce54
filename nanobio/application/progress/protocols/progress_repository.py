from typing import Protocol

from nanobio.domain.common.value_objects import ModuleId, UserId
from nanobio.domain.progress.entities.module_progress import ModuleProgress


class ProgressRepositoryProtocol(Protocol):
    async def find_by_user(self, user_id: UserId) -> list[ModuleProgress]: ...

    async def find(self, user_id: UserId, module_id: ModuleId) -> ModuleProgress | None: ...

    async def find_completed_module_ids(self, user_id: UserId) -> set[ModuleId]: ...

    async def count_completed(self, user_id: UserId) -> int: ...

    async def find_most_recent(self, user_id: UserId) -> ModuleProgress | None: ...

    async def save_quiz_result(self, progress: ModuleProgress) -> ModuleProgress: ...

    async def save_completion(self, progress: ModuleProgress) -> ModuleProgress: ...

    async def save_opened(self, progress: ModuleProgress) -> ModuleProgress: ...
