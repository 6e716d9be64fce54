"""Use case for viewing and editing the profile page."""

import structlog

from nanobio.application.progression.protocols import ProfileRepositoryProtocol
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progression.entities.profile import Profile
from nanobio.exceptions import ProfileNotFoundError

logger = structlog.get_logger(__name__)


class ProfileUseCase:
    """Profile identity fields; progression fields are read-only here."""

    def __init__(self, profile_repository: ProfileRepositoryProtocol) -> None:
        self.profile_repository = profile_repository

    async def get_profile(self, user_id: UserId) -> Profile:
        profile = await self.profile_repository.find_by_id(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id.value)
        return profile

    async def update_profile(
        self,
        user_id: UserId,
        full_name: str | None = None,
        institution: str | None = None,
        role: str | None = None,
    ) -> Profile:
        """
        Update name, institution and role, creating the profile if missing.

        Raises:
            ValidationError: If a field is too long
            StoreFailureError: If the write fails
        """
        profile = await self.profile_repository.find_by_id(user_id)
        if profile is None:
            profile = Profile.create(user_id)
        profile.update_details(full_name=full_name, institution=institution, role=role)
        profile = await self.profile_repository.save_details(profile)

        logger.info("user_profile_updated", user_id=user_id.value)
        return profile
