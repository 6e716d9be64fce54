"""Use case for the mastery analytics view."""

from dataclasses import dataclass

from nanobio.application.catalog.protocols import ModuleRepositoryProtocol
from nanobio.application.common.read_fallback import read_or_default
from nanobio.application.progress.protocols import (
    AttemptRepositoryProtocol,
    ProgressRepositoryProtocol,
)
from nanobio.application.progression.protocols import ProfileRepositoryProtocol
from nanobio.domain.catalog.services.domain_derivation import DomainDeriver, explicit_domain
from nanobio.domain.common.value_objects import ModuleId, UserId
from nanobio.domain.progress.services.accuracy import accuracy_percentage
from nanobio.domain.progress.services.domain_aggregator import DomainStat, compute_domain_stats
from nanobio.domain.progression.entities.profile import Profile


@dataclass(frozen=True)
class AnalyticsView:
    profile: Profile | None
    domain_stats: list[DomainStat]
    total_completed: int
    accuracy: int


class AnalyticsUseCase:
    """
    Per-domain mastery, completion total and answer accuracy.

    All I/O happens here; the figures themselves come from the pure domain
    services.
    """

    def __init__(
        self,
        profile_repository: ProfileRepositoryProtocol,
        module_repository: ModuleRepositoryProtocol,
        progress_repository: ProgressRepositoryProtocol,
        attempt_repository: AttemptRepositoryProtocol,
        derive: DomainDeriver = explicit_domain,
    ) -> None:
        self.profile_repository = profile_repository
        self.module_repository = module_repository
        self.progress_repository = progress_repository
        self.attempt_repository = attempt_repository
        self.derive = derive

    async def get_analytics(self, user_id: UserId) -> AnalyticsView:
        profile = await read_or_default(
            self.profile_repository.find_by_id(user_id), None, view="analytics", source="profiles"
        )
        modules = await read_or_default(
            self.module_repository.find_all(), [], view="analytics", source="modules"
        )
        completed_ids: set[ModuleId] = await read_or_default(
            self.progress_repository.find_completed_module_ids(user_id),
            set(),
            view="analytics",
            source="module_progress",
        )
        attempts = await read_or_default(
            self.attempt_repository.find_by_user(user_id),
            [],
            view="analytics",
            source="user_quiz_attempts",
        )
        return AnalyticsView(
            profile=profile,
            domain_stats=compute_domain_stats(modules, completed_ids, self.derive),
            total_completed=len(completed_ids),
            accuracy=accuracy_percentage(attempts),
        )
