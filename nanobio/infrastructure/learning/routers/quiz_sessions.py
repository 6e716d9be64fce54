"""API routes for the user's live quiz session."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from nanobio.application.learning.session_registry import LearningSessionRegistry
from nanobio.core import container
from nanobio.domain.common.exceptions import DomainError
from nanobio.domain.learning.entities.quiz_session import QuizState
from nanobio.exceptions import LearningModuleNotFoundError, NanobioError
from nanobio.infrastructure.common.di import inject_use_case
from nanobio.infrastructure.identity.dependencies import CurrentUser
from nanobio.infrastructure.learning.schemas import (
    OptionSelectRequest,
    QuizFinishResponse,
    QuizSessionResponse,
    QuizSessionStartRequest,
)
from nanobio.infrastructure.progress.schemas import ModuleProgressSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/quiz", tags=["quiz sessions"])


@router.post("", response_model=QuizSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_quiz_session(
    request: QuizSessionStartRequest,
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> QuizSessionResponse:
    """
    Start a quiz on a module, replacing the quiz the user had open.

    Questions come easiest first. A module without questions finishes at
    once with a score of 0.

    Raises:
        HTTPException: If no module has this slug, or on unexpected errors
    """
    try:
        async with sessions.guard(current_user):
            engine = await sessions.start_quiz(current_user, request.slug)
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to start quiz {request.slug}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    if engine.state is QuizState.NOT_FOUND:
        raise LearningModuleNotFoundError(request.slug)
    return QuizSessionResponse.from_session(engine.session)


@router.get("", response_model=QuizSessionResponse, status_code=status.HTTP_200_OK)
async def get_quiz_session(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> QuizSessionResponse:
    """Get the user's current quiz session."""
    return QuizSessionResponse.from_session(sessions.quiz(current_user).session)


@router.post("/select", response_model=QuizSessionResponse, status_code=status.HTTP_200_OK)
async def select_option(
    request: OptionSelectRequest,
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> QuizSessionResponse:
    """Choose an option for the current question; a later choice replaces it."""
    async with sessions.guard(current_user):
        engine = sessions.quiz(current_user)
        engine.select(request.option)
        return QuizSessionResponse.from_session(engine.session)


@router.post("/verify", response_model=QuizSessionResponse, status_code=status.HTTP_200_OK)
async def verify_answer(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> QuizSessionResponse:
    """
    Reveal whether the selected option is correct.

    Verifying with nothing selected is rejected with 400 and changes nothing.
    """
    async with sessions.guard(current_user):
        engine = sessions.quiz(current_user)
        engine.verify()
        return QuizSessionResponse.from_session(engine.session)


@router.post("/advance", response_model=QuizSessionResponse, status_code=status.HTTP_200_OK)
async def advance_question(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> QuizSessionResponse:
    """
    Record the verified answer and move to the next question.

    After the last question the result is saved and the session finishes.
    If a write fails the session stays on the revealed question and the
    call can be repeated.

    Raises:
        HTTPException: On unexpected errors
    """
    try:
        async with sessions.guard(current_user):
            engine = sessions.quiz(current_user)
            session = await engine.advance()
            return QuizSessionResponse.from_session(session)
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to advance quiz for user {current_user}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/finish", response_model=QuizFinishResponse, status_code=status.HTTP_200_OK)
async def finish_quiz(
    current_user: CurrentUser,
    sessions: LearningSessionRegistry = Depends(inject_use_case(container.learning_sessions)),
) -> QuizFinishResponse:
    """
    Write the result of a finished quiz again.

    The write is idempotent and records no attempts.

    Raises:
        HTTPException: On unexpected errors
    """
    try:
        async with sessions.guard(current_user):
            engine = sessions.quiz(current_user)
            progress = await engine.finish()
            return QuizFinishResponse(
                session=QuizSessionResponse.from_session(engine.session),
                progress=ModuleProgressSchema.from_entity(progress),
            )
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to finish quiz for user {current_user}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
