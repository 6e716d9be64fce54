"""API routes for the user's live flashcard review."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from nanobio.application.learning.session_registry import LearningSessionRegistry
from nanobio.core import container
from nanobio.domain.common.exceptions import DomainError
from nanobio.domain.common.value_objects import ModuleId
from nanobio.exceptions import NanobioError
from nanobio.infrastructure.common.di import inject_use_case
from nanobio.infrastructure.identity.dependencies import CurrentUser
from nanobio.infrastructure.learning.schemas import (
    FlashcardGradeRequest,
    FlashcardSessionResponse,
    FlashcardSessionStartRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/flashcards", tags=["flashcard sessions"])


@router.post("", response_model=FlashcardSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_flashcard_session(
    request: FlashcardSessionStartRequest,
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> FlashcardSessionResponse:
    """
    Start reviewing key terms, replacing the review the user had open.

    An empty deck starts in the no_content state and earns nothing.

    Raises:
        HTTPException: On unexpected errors
    """
    module_id = ModuleId(request.module_id) if request.module_id else None
    try:
        async with sessions.guard(current_user):
            engine = await sessions.start_flashcards(current_user, module_id)
            return FlashcardSessionResponse.from_session(engine.session)
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to start flashcards for user {current_user}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("", response_model=FlashcardSessionResponse, status_code=status.HTTP_200_OK)
async def get_flashcard_session(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> FlashcardSessionResponse:
    """Get the user's current flashcard review."""
    return FlashcardSessionResponse.from_session(sessions.flashcards(current_user).session)


@router.post("/flip", response_model=FlashcardSessionResponse, status_code=status.HTTP_200_OK)
async def flip_card(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> FlashcardSessionResponse:
    """Turn the current card between term and definition."""
    async with sessions.guard(current_user):
        engine = sessions.flashcards(current_user)
        engine.flip()
        return FlashcardSessionResponse.from_session(engine.session)


@router.post("/grade", response_model=FlashcardSessionResponse, status_code=status.HTTP_200_OK)
async def grade_card(
    request: FlashcardGradeRequest,
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> FlashcardSessionResponse:
    """
    Grade the current card and show the next one.

    Grading the last card completes the deck and awards its experience. If
    that award fails the response is an error, the deck stays complete and
    the award can be retried through ``/complete``.

    Raises:
        HTTPException: On unexpected errors
    """
    try:
        async with sessions.guard(current_user):
            engine = sessions.flashcards(current_user)
            await engine.grade(request.grade)
            return FlashcardSessionResponse.from_session(engine.session)
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to grade flashcard for user {current_user}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/complete", response_model=FlashcardSessionResponse, status_code=status.HTTP_200_OK)
async def complete_deck(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> FlashcardSessionResponse:
    """
    Issue the deck award if it is still owed; a no-op once it was granted.

    Raises:
        HTTPException: On unexpected errors
    """
    try:
        async with sessions.guard(current_user):
            engine = sessions.flashcards(current_user)
            await engine.complete()
            return FlashcardSessionResponse.from_session(engine.session)
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to complete deck for user {current_user}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
