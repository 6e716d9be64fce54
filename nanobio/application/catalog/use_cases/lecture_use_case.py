"""Use case for reading a lecture and marking it complete."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from nanobio.application.catalog.protocols import (
    KeyTermRepositoryProtocol,
    ModuleRepositoryProtocol,
)
from nanobio.application.common.read_fallback import read_or_default
from nanobio.application.progress.protocols import ProgressRepositoryProtocol
from nanobio.domain.catalog.entities.key_term import KeyTerm
from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progress.entities.module_progress import ModuleProgress
from nanobio.exceptions import LearningModuleNotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Lecture:
    """Module content with its key terms."""

    module: Module
    key_terms: list[KeyTerm]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LectureUseCase:
    """Lecture reading and explicit completion."""

    def __init__(
        self,
        module_repository: ModuleRepositoryProtocol,
        key_term_repository: KeyTermRepositoryProtocol,
        progress_repository: ProgressRepositoryProtocol,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.module_repository = module_repository
        self.key_term_repository = key_term_repository
        self.progress_repository = progress_repository
        self.clock = clock

    async def open_lecture(self, user_id: UserId, slug: str) -> Lecture | None:
        """
        Load a lecture and record when the user opened it.

        Returns:
            The lecture, or None if no module has this slug

        Raises:
            StoreFailureError: If the module read or the last-opened upsert fails
        """
        module = await self.module_repository.find_by_slug(slug)
        if module is None:
            return None

        key_terms = await read_or_default(
            self.key_term_repository.find_by_module(module.id),
            [],
            view="lecture",
            source="key_terms",
        )

        progress = ModuleProgress(user_id=user_id, module_id=module.id)
        progress.touch(self.clock())
        await self.progress_repository.save_opened(progress)

        logger.info("lecture_opened", user_id=user_id.value, module_id=module.id.value)
        return Lecture(module=module, key_terms=key_terms)

    async def mark_complete(self, user_id: UserId, slug: str) -> ModuleProgress:
        """
        Mark a module complete outside the quiz flow.

        Raises:
            LearningModuleNotFoundError: If no module has this slug
            StoreFailureError: If the upsert fails
        """
        module = await self.module_repository.find_by_slug(slug)
        if module is None:
            raise LearningModuleNotFoundError(slug)

        progress = ModuleProgress(user_id=user_id, module_id=module.id)
        progress.mark_complete()
        saved = await self.progress_repository.save_completion(progress)

        logger.info("module_marked_complete", user_id=user_id.value, module_id=module.id.value)
        return saved
