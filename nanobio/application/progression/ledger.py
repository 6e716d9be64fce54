"""Progression ledger: the single writer of a user's experience."""

import asyncio
from typing import Any

import structlog

from nanobio.application.common.protocols import (
    ChangeEvent,
    ChangeFeedProtocol,
    ChangeSubscriptionProtocol,
    ChangeType,
)
from nanobio.application.progression.protocols import ProfileRepositoryProtocol
from nanobio.domain.common.exceptions import ValidationError
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progression.entities.profile import Profile
from nanobio.exceptions import ProfileNotFoundError, StoreFailureError

logger = structlog.get_logger(__name__)

PROFILES_TABLE = "profiles"


class ProgressionLedger:
    """
    In-memory view of one user's profile, kept fresh from two sources.

    Local awards go through ``award_experience``. Writes made elsewhere
    arrive on the change feed and replace the view wholesale; the store is
    the source of truth, so nothing is merged.
    """

    def __init__(
        self,
        user_id: UserId,
        profile_repository: ProfileRepositoryProtocol,
        change_feed: ChangeFeedProtocol | None = None,
    ) -> None:
        self.user_id = user_id
        self.profile_repository = profile_repository
        self.change_feed = change_feed
        self._profile: Profile | None = None
        self._subscription: ChangeSubscriptionProtocol | None = None
        self._listener: asyncio.Task[None] | None = None

    @property
    def profile(self) -> Profile | None:
        return self._profile

    async def load(self) -> Profile:
        """
        Read the stored profile into the view.

        Raises:
            ProfileNotFoundError: If the user has no profile
            StoreFailureError: If the read fails
        """
        profile = await self.profile_repository.find_by_id(self.user_id)
        if profile is None:
            raise ProfileNotFoundError(self.user_id.value)
        self._profile = profile
        return profile

    async def award_experience(self, amount: int) -> Profile:
        """
        Add experience through the store procedure and return the result.

        The view is read before the procedure runs, so a missing profile or a
        failed read stops the award before anything is written. Once the
        procedure returns the award is applied: a failed refresh afterwards is
        logged and the view advances locally instead of raising.

        Raises:
            ValidationError: If amount is negative (no store call is made)
            ProfileNotFoundError: If the user has no profile (no award is made)
            StoreFailureError: If the initial read or the procedure fails
        """
        if amount < 0:
            raise ValidationError("Experience award must be non-negative", "amount", amount)

        before = self._profile if self._profile is not None else await self.load()
        await self.profile_repository.increment_xp(self.user_id, amount)
        try:
            profile = await self.load()
        except StoreFailureError as e:
            logger.warning(
                "profile_refresh_failed",
                user_id=self.user_id.value,
                amount=amount,
                error=e.message,
            )
            # A snapshot pushed meanwhile already reflects the store
            if self._profile is not None and self._profile is not before:
                profile = self._profile
            else:
                profile = self._profile = before.awarded(amount)

        logger.info(
            "experience_awarded",
            user_id=self.user_id.value,
            amount=amount,
            xp=profile.xp,
            level=profile.level,
        )
        return profile

    def apply_snapshot(self, record: dict[str, Any]) -> Profile | None:
        """
        Replace the view with a pushed profile row (last write wins).

        Rows for other users are ignored and return None.
        """
        if str(record.get("id")) != self.user_id.value:
            return None
        self._profile = self.profile_repository.from_snapshot(record)
        logger.debug("profile_snapshot_applied", user_id=self.user_id.value, xp=self._profile.xp)
        return self._profile

    # Change feed

    def subscribe(self) -> ChangeSubscriptionProtocol:
        """Open the profile update subscription; idempotent."""
        if self.change_feed is None:
            raise RuntimeError("ProgressionLedger has no change feed")
        if self._subscription is None:
            self._subscription = self.change_feed.subscribe(PROFILES_TABLE, ChangeType.UPDATE)
        return self._subscription

    async def listen(self) -> None:
        """Apply pushed snapshots until the subscription is closed."""
        subscription = self.subscribe()
        async for event in subscription:
            self._handle(event)

    def start(self) -> None:
        """Subscribe now and run ``listen`` in a background task."""
        self.subscribe()
        if self._listener is None or self._listener.done():
            self._listener = asyncio.create_task(self.listen())

    async def stop(self) -> None:
        """Close the subscription and wait for the listener to drain."""
        if self._subscription is not None:
            self._subscription.close()
        if self._listener is not None:
            await self._listener
        self._listener = None
        self._subscription = None

    def _handle(self, event: ChangeEvent) -> None:
        self.apply_snapshot(event.record)
