"""Pydantic schemas for profile API request/response validation."""

from pydantic import BaseModel, Field

from nanobio.domain.progression.entities.profile import MAX_FIELD_LENGTH, Profile


class ProfileSchema(BaseModel):
    """Schema for a profile response."""

    id: str
    full_name: str | None
    institution: str | None
    role: str | None
    xp: int = Field(..., ge=0, description="Experience points")
    level: int = Field(..., ge=1, description="Level derived from experience")
    streak: int = Field(..., ge=0, description="Consecutive active days")

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileSchema":
        return cls(
            id=profile.id.value,
            full_name=profile.full_name,
            institution=profile.institution,
            role=profile.role,
            xp=profile.xp,
            level=profile.level,
            streak=profile.streak,
        )


class ProfileUpdateRequest(BaseModel):
    """Schema for updating profile details; progression fields are not accepted."""

    full_name: str | None = Field(None, max_length=MAX_FIELD_LENGTH, description="Display name")
    institution: str | None = Field(
        None, max_length=MAX_FIELD_LENGTH, description="School or organisation"
    )
    role: str | None = Field(None, max_length=MAX_FIELD_LENGTH, description="Learner role")

    model_config = {"extra": "forbid"}


class ProfileUpdateResponse(BaseModel):
    """Schema for profile update response."""

    success: bool = Field(..., description="Whether the update was successful")
    message: str = Field(..., description="Response message")
    profile: ProfileSchema
