"""API routes for the module catalog and lectures."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from nanobio.application.catalog.use_cases.catalog_use_case import CatalogUseCase
from nanobio.application.catalog.use_cases.lecture_use_case import LectureUseCase
from nanobio.core import container
from nanobio.domain.common.exceptions import DomainError
from nanobio.exceptions import LearningModuleNotFoundError, NanobioError
from nanobio.infrastructure.catalog.schemas import (
    KeyTermSchema,
    LectureResponse,
    ModuleCompleteResponse,
    ModuleListItem,
    ModuleListResponse,
    ModuleSummary,
)
from nanobio.infrastructure.common.di import inject_use_case
from nanobio.infrastructure.identity.dependencies import CurrentUser
from nanobio.infrastructure.progress.schemas import ModuleProgressSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/modules", tags=["modules"])


@router.get("", response_model=ModuleListResponse, status_code=status.HTTP_200_OK)
async def list_modules(
    current_user: CurrentUser,
    use_case: CatalogUseCase = Depends(inject_use_case(container.catalog_use_case)),
) -> ModuleListResponse:
    """
    Get all modules ordered by title with the user's completion flag.

    Store failures degrade to an empty list rather than an error.
    """
    listings = await use_case.list_modules(current_user)
    return ModuleListResponse(
        modules=[
            ModuleListItem(module=ModuleSummary.from_entity(item.module), completed=item.completed)
            for item in listings
        ]
    )


@router.get("/{slug}", response_model=LectureResponse, status_code=status.HTTP_200_OK)
async def open_lecture(
    slug: str,
    current_user: CurrentUser,
    use_case: LectureUseCase = Depends(inject_use_case(container.lecture_use_case)),
) -> LectureResponse:
    """
    Get a lecture and record that the user opened it.

    Args:
        slug: Module slug
        use_case: LectureUseCase injected via dependency container

    Returns:
        Module content with its key terms

    Raises:
        HTTPException: If no module has this slug, or on unexpected errors
    """
    try:
        lecture = await use_case.open_lecture(current_user, slug)
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to open lecture {slug}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    if lecture is None:
        raise LearningModuleNotFoundError(slug)
    return LectureResponse(
        module=ModuleSummary.from_entity(lecture.module),
        content=lecture.module.content,
        key_terms=[KeyTermSchema.from_entity(term) for term in lecture.key_terms],
    )


@router.post(
    "/{slug}/complete",
    response_model=ModuleCompleteResponse,
    status_code=status.HTTP_200_OK,
)
async def mark_module_complete(
    slug: str,
    current_user: CurrentUser,
    use_case: LectureUseCase = Depends(inject_use_case(container.lecture_use_case)),
) -> ModuleCompleteResponse:
    """
    Mark a module complete outside the quiz flow.

    Raises:
        HTTPException: If no module has this slug, or on unexpected errors
    """
    try:
        progress = await use_case.mark_complete(current_user, slug)
        return ModuleCompleteResponse(
            success=True,
            message="Module marked complete",
            progress=ModuleProgressSchema.from_entity(progress),
        )
    except (NanobioError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to mark module {slug} complete: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
