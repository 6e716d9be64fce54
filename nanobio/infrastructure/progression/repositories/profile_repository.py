"""Repository for Profile domain entities."""

from typing import Any

from nanobio.application.common.protocols import RecordStoreProtocol
from nanobio.constants import INCREMENT_XP_PROCEDURE
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progression.entities.profile import Profile
from nanobio.infrastructure.progression.mappers.profile_mapper import ProfileMapper

PROFILES_TABLE = "profiles"


class ProfileRepository:
    """
    Profile persistence.

    Experience is only ever changed through the ``increment_xp`` store
    procedure, which adds atomically on the server side.
    """

    def __init__(self, store: RecordStoreProtocol) -> None:
        self.store = store
        self.mapper = ProfileMapper()

    async def find_by_id(self, user_id: UserId) -> Profile | None:
        records = await self.store.select(PROFILES_TABLE, {"id": user_id.value}, limit=1)
        return self.mapper.to_domain(records[0]) if records else None

    async def save_details(self, profile: Profile) -> Profile:
        """
        Create or update the identity fields of a profile.

        Args:
            profile: Profile entity carrying the new details

        Returns:
            The stored profile
        """
        record = await self.store.upsert(
            PROFILES_TABLE, self.mapper.details_record(profile), ("id",)
        )
        return self.mapper.to_domain(record)

    async def increment_xp(self, user_id: UserId, amount: int) -> None:
        await self.store.rpc(INCREMENT_XP_PROCEDURE, {"uid": user_id.value, "x": amount})

    def from_snapshot(self, record: dict[str, Any]) -> Profile:
        return self.mapper.to_domain(record)
