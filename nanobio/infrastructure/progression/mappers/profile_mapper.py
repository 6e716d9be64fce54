"""Mapper for profiles rows ↔ Profile entities."""

from typing import Any

from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progression.entities.profile import Profile


class ProfileMapper:
    """Mapper for profiles rows ↔ Profile entities."""

    def to_domain(self, record: dict[str, Any]) -> Profile:
        """Convert a stored row (or a pushed snapshot) to a domain entity."""
        return Profile(
            id=UserId(str(record["id"])),
            xp=int(record.get("xp") or 0),
            level=int(record.get("level") or 1),
            streak=int(record.get("streak") or 0),
            full_name=record.get("full_name"),
            institution=record.get("institution"),
            role=record.get("role"),
        )

    def details_record(self, profile: Profile) -> dict[str, Any]:
        """Identity columns only; xp, level and streak are never written here."""
        return {
            "id": profile.id.value,
            "full_name": profile.full_name,
            "institution": profile.institution,
            "role": profile.role,
        }
