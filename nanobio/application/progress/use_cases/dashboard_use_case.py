"""Use case for the learner dashboard summary."""

from dataclasses import dataclass

from nanobio.application.catalog.protocols import ModuleRepositoryProtocol
from nanobio.application.common.read_fallback import read_or_default
from nanobio.application.progress.protocols import ProgressRepositoryProtocol
from nanobio.application.progression.protocols import ProfileRepositoryProtocol
from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progress.entities.module_progress import ModuleProgress
from nanobio.domain.progress.services.domain_aggregator import overall_mastery
from nanobio.domain.progression.entities.profile import Profile


@dataclass(frozen=True)
class RecentModule:
    module: Module
    progress: ModuleProgress


@dataclass(frozen=True)
class DashboardView:
    profile: Profile | None
    total_modules: int
    completed_modules: int
    mastery_percentage: int
    recent: RecentModule | None


class DashboardUseCase:
    """Profile, completion counts and the most recently opened module."""

    def __init__(
        self,
        profile_repository: ProfileRepositoryProtocol,
        module_repository: ModuleRepositoryProtocol,
        progress_repository: ProgressRepositoryProtocol,
    ) -> None:
        self.profile_repository = profile_repository
        self.module_repository = module_repository
        self.progress_repository = progress_repository

    async def get_dashboard(self, user_id: UserId) -> DashboardView:
        profile = await read_or_default(
            self.profile_repository.find_by_id(user_id), None, view="dashboard", source="profiles"
        )
        total = await read_or_default(
            self.module_repository.count(), 0, view="dashboard", source="modules"
        )
        completed = await read_or_default(
            self.progress_repository.count_completed(user_id),
            0,
            view="dashboard",
            source="module_progress",
        )
        return DashboardView(
            profile=profile,
            total_modules=total,
            completed_modules=completed,
            mastery_percentage=overall_mastery(total, completed),
            recent=await self._recent_module(user_id),
        )

    async def _recent_module(self, user_id: UserId) -> RecentModule | None:
        progress = await read_or_default(
            self.progress_repository.find_most_recent(user_id),
            None,
            view="dashboard",
            source="module_progress",
        )
        if progress is None:
            return None
        module = await read_or_default(
            self.module_repository.find_by_id(progress.module_id),
            None,
            view="dashboard",
            source="modules",
        )
        if module is None:
            return None
        return RecentModule(module=module, progress=progress)
