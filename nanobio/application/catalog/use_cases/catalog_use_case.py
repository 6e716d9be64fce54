"""Use case for the module and quiz catalog listings."""

from dataclasses import dataclass

from nanobio.application.catalog.protocols import ModuleRepositoryProtocol
from nanobio.application.common.read_fallback import read_or_default
from nanobio.application.progress.protocols import ProgressRepositoryProtocol
from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.catalog.services.domain_derivation import title_domain
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progress.entities.module_progress import ModuleProgress


@dataclass(frozen=True)
class ModuleListing:
    """Catalog entry with the user's completion flag."""

    module: Module
    completed: bool


@dataclass(frozen=True)
class QuizListing:
    """Quiz catalog entry."""

    module: Module
    tier: str
    category: str


class CatalogUseCase:
    """Read-only catalog views; store failures degrade to empty lists."""

    def __init__(
        self,
        module_repository: ModuleRepositoryProtocol,
        progress_repository: ProgressRepositoryProtocol,
    ) -> None:
        self.module_repository = module_repository
        self.progress_repository = progress_repository

    async def list_modules(self, user_id: UserId) -> list[ModuleListing]:
        """All modules ordered by title, flagged with the user's completion."""
        modules = await read_or_default(
            self.module_repository.find_all(), [], view="catalog", source="modules"
        )
        progress: list[ModuleProgress] = await read_or_default(
            self.progress_repository.find_by_user(user_id),
            [],
            view="catalog",
            source="module_progress",
        )
        completed = {p.module_id for p in progress if p.completed}
        return [ModuleListing(module=m, completed=m.id in completed) for m in modules]

    async def list_quizzes(self) -> list[QuizListing]:
        """All modules as quiz topics, with tier label and title category."""
        modules = await read_or_default(
            self.module_repository.find_all(), [], view="quizzes", source="modules"
        )
        return [
            QuizListing(module=m, tier=m.tier_label, category=title_domain(m)) for m in modules
        ]
