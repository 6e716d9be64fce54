"""API routes for the learner dashboard and analytics."""

from fastapi import APIRouter, Depends, status

from nanobio.application.progress.use_cases.analytics_use_case import AnalyticsUseCase
from nanobio.application.progress.use_cases.dashboard_use_case import DashboardUseCase
from nanobio.core import container
from nanobio.infrastructure.common.di import inject_use_case
from nanobio.infrastructure.identity.dependencies import CurrentUser
from nanobio.infrastructure.progress.schemas import (
    AnalyticsResponse,
    DashboardResponse,
    DomainStatSchema,
    ModuleProgressSchema,
    RecentModuleSchema,
)
from nanobio.infrastructure.progression.schemas import ProfileSchema

router = APIRouter(tags=["progress"])


@router.get("/dashboard", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
async def get_dashboard(
    current_user: CurrentUser,
    use_case: DashboardUseCase = Depends(inject_use_case(container.dashboard_use_case)),
) -> DashboardResponse:
    """
    Get the dashboard summary for the current user.

    Each figure falls back to an empty value when its read fails, so the
    page always renders.
    """
    view = await use_case.get_dashboard(current_user)
    recent = None
    if view.recent is not None:
        recent = RecentModuleSchema(
            module_id=view.recent.module.id.value,
            title=view.recent.module.title,
            slug=view.recent.module.slug,
            progress=ModuleProgressSchema.from_entity(view.recent.progress),
        )
    return DashboardResponse(
        profile=ProfileSchema.from_entity(view.profile) if view.profile else None,
        total_modules=view.total_modules,
        completed_modules=view.completed_modules,
        mastery_percentage=view.mastery_percentage,
        recent_module=recent,
    )


@router.get("/analytics", response_model=AnalyticsResponse, status_code=status.HTTP_200_OK)
async def get_analytics(
    current_user: CurrentUser,
    use_case: AnalyticsUseCase = Depends(inject_use_case(container.analytics_use_case)),
) -> AnalyticsResponse:
    """Get per-domain mastery, completion total and answer accuracy."""
    view = await use_case.get_analytics(current_user)
    return AnalyticsResponse(
        profile=ProfileSchema.from_entity(view.profile) if view.profile else None,
        domain_stats=[DomainStatSchema.from_stat(stat) for stat in view.domain_stats],
        total_completed=view.total_completed,
        accuracy=view.accuracy,
    )
