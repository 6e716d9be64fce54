"""API routes for the user profile."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from nanobio.application.progression.use_cases.profile_use_case import ProfileUseCase
from nanobio.core import container
from nanobio.domain.common.exceptions import DomainError
from nanobio.exceptions import NanobioError
from nanobio.infrastructure.common.di import inject_use_case
from nanobio.infrastructure.identity.dependencies import CurrentUser
from nanobio.infrastructure.progression.schemas import (
    ProfileSchema,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileSchema, status_code=status.HTTP_200_OK)
async def get_profile(
    current_user: CurrentUser,
    use_case: ProfileUseCase = Depends(inject_use_case(container.profile_use_case)),
) -> ProfileSchema:
    """
    Get the current user's profile.

    Raises:
        ProfileNotFoundError: If the user has no profile yet
    """
    profile = await use_case.get_profile(current_user)
    return ProfileSchema.from_entity(profile)


@router.put("", response_model=ProfileUpdateResponse, status_code=status.HTTP_200_OK)
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: CurrentUser,
    use_case: ProfileUseCase = Depends(inject_use_case(container.profile_use_case)),
) -> ProfileUpdateResponse:
    """
    Update name, institution and role.

    Args:
        request: New profile details; omitted fields are left unchanged
        use_case: ProfileUseCase injected via dependency container

    Returns:
        The stored profile

    Raises:
        HTTPException: On unexpected errors
    """
    try:
        profile = await use_case.update_profile(
            current_user,
            full_name=request.full_name,
            institution=request.institution,
            role=request.role,
        )
        return ProfileUpdateResponse(
            success=True,
            message="Profile updated successfully",
            profile=ProfileSchema.from_entity(profile),
        )
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update profile for user {current_user}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
