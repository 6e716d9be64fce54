"""API routes for the quiz catalog."""

from fastapi import APIRouter, Depends, status

from nanobio.application.catalog.use_cases.catalog_use_case import CatalogUseCase
from nanobio.core import container
from nanobio.infrastructure.catalog.schemas import ModuleSummary, QuizListItem, QuizListResponse
from nanobio.infrastructure.common.di import inject_use_case
from nanobio.infrastructure.identity.dependencies import CurrentUser

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.get("", response_model=QuizListResponse, status_code=status.HTTP_200_OK)
async def list_quizzes(
    current_user: CurrentUser,
    use_case: CatalogUseCase = Depends(inject_use_case(container.catalog_use_case)),
) -> QuizListResponse:
    """Get every module as a quiz topic with its tier and category."""
    listings = await use_case.list_quizzes()
    return QuizListResponse(
        quizzes=[
            QuizListItem(
                module=ModuleSummary.from_entity(item.module),
                tier=item.tier,
                category=item.category,
            )
            for item in listings
        ]
    )
