"""API route for the live progression view."""

from fastapi import APIRouter, Depends, status

from nanobio.application.learning.session_registry import LearningSessionRegistry
from nanobio.core import container
from nanobio.infrastructure.common.di import inject_use_case
from nanobio.infrastructure.identity.dependencies import CurrentUser
from nanobio.infrastructure.progression.schemas import ProfileSchema

router = APIRouter(prefix="/progression", tags=["progression"])


@router.get("", response_model=ProfileSchema, status_code=status.HTTP_200_OK)
async def get_progression(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> ProfileSchema:
    """
    Get the user's experience, level and streak from their ledger.

    The ledger follows profile changes pushed by the store, so this view
    reflects awards and external writes without re-reading the profile.

    Raises:
        ProfileNotFoundError: If the user has no profile yet
    """
    profile = await sessions.progression(current_user)
    return ProfileSchema.from_entity(profile)
