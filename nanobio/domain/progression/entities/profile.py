"""
Profile entity: the experience, level and streak ledger of one user.
"""

from dataclasses import dataclass, replace

from nanobio.constants import XP_PER_LEVEL
from nanobio.domain.common.entity import Entity
from nanobio.domain.common.exceptions import InvariantViolationError, ValidationError
from nanobio.domain.common.value_objects import UserId

MAX_FIELD_LENGTH = 200


def level_for_xp(xp: int) -> int:
    """Monotonic step function from experience to level, starting at 1."""
    return max(xp, 0) // XP_PER_LEVEL + 1


@dataclass(eq=False)
class Profile(Entity[UserId]):
    """
    Per-user progression state.

    Business Rules:
    - xp and streak are non-negative, level is at least 1
    - Awards only ever add experience
    - An award never lowers the level, even if the stored level was set by
      an external rule above what the experience implies
    - Streak is maintained outside this package and is read-only here
    """

    id: UserId
    xp: int = 0
    level: int = 1
    streak: int = 0
    full_name: str | None = None
    institution: str | None = None
    role: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.xp < 0:
            raise InvariantViolationError("Profile", "xp must be non-negative")
        if self.level < 1:
            raise InvariantViolationError("Profile", "level must be at least 1")
        if self.streak < 0:
            raise InvariantViolationError("Profile", "streak must be non-negative")

    def awarded(self, amount: int) -> "Profile":
        """
        Return the profile after an experience award.

        Args:
            amount: Non-negative experience to add

        Raises:
            ValidationError: If amount is negative
        """
        if amount < 0:
            raise ValidationError("Experience award must be non-negative", "amount", amount)
        xp = self.xp + amount
        return replace(self, xp=xp, level=max(self.level, level_for_xp(xp)))

    def update_details(
        self,
        full_name: str | None = None,
        institution: str | None = None,
        role: str | None = None,
    ) -> None:
        """
        Update the identity fields shown on the profile page.

        Raises:
            ValidationError: If a field exceeds MAX_FIELD_LENGTH characters
        """
        for name, value in (("full_name", full_name), ("institution", institution), ("role", role)):
            if value is None:
                continue
            cleaned = value.strip()
            if len(cleaned) > MAX_FIELD_LENGTH:
                raise ValidationError(f"{name} is too long", field=name)
            setattr(self, name, cleaned or None)

    @classmethod
    def create(cls, user_id: UserId, full_name: str | None = None) -> "Profile":
        """Create the profile for a newly registered user."""
        return cls(id=user_id, full_name=full_name)
