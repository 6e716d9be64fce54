from typing import Any, Protocol

from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progression.entities.profile import Profile


class ProfileRepositoryProtocol(Protocol):
    async def find_by_id(self, user_id: UserId) -> Profile | None: ...

    async def save_details(self, profile: Profile) -> Profile: ...

    async def increment_xp(self, user_id: UserId, amount: int) -> None: ...

    def from_snapshot(self, record: dict[str, Any]) -> Profile: ...
