"""Tests for the catalog, lecture, dashboard, analytics and profile use cases."""

from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from nanobio.application.catalog.use_cases.catalog_use_case import CatalogUseCase
from nanobio.application.catalog.use_cases.lecture_use_case import LectureUseCase
from nanobio.application.progress.use_cases.analytics_use_case import AnalyticsUseCase
from nanobio.application.progress.use_cases.dashboard_use_case import DashboardUseCase
from nanobio.application.progression.use_cases.profile_use_case import ProfileUseCase
from nanobio.database import Base
from nanobio.domain.common.exceptions import ValidationError
from nanobio.domain.common.value_objects import ModuleId, OptionLabel, QuestionId, UserId
from nanobio.domain.progress.entities.quiz_attempt import QuizAttempt
from nanobio.exceptions import LearningModuleNotFoundError, ProfileNotFoundError
from nanobio.infrastructure.catalog.repositories.key_term_repository import KeyTermRepository
from nanobio.infrastructure.catalog.repositories.module_repository import ModuleRepository
from nanobio.infrastructure.progress.repositories.attempt_repository import AttemptRepository
from nanobio.infrastructure.progress.repositories.progress_repository import ProgressRepository
from nanobio.infrastructure.progression.repositories.profile_repository import ProfileRepository
from nanobio.infrastructure.store import SqlRecordStore

OPENED_AT = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture
def lecture_use_case(
    seeded_store: SqlRecordStore,
    module_repository: ModuleRepository,
    key_term_repository: KeyTermRepository,
    progress_repository: ProgressRepository,
) -> LectureUseCase:
    return LectureUseCase(
        module_repository, key_term_repository, progress_repository, clock=lambda: OPENED_AT
    )


class TestCatalogUseCase:
    @pytest.mark.asyncio
    async def test_modules_ordered_by_title_with_completion(
        self,
        seeded_store: SqlRecordStore,
        user_id: UserId,
        module_repository: ModuleRepository,
        progress_repository: ProgressRepository,
        lecture_use_case: LectureUseCase,
    ) -> None:
        await lecture_use_case.mark_complete(user_id, "crispr-delivery")
        use_case = CatalogUseCase(module_repository, progress_repository)

        listings = await use_case.list_modules(user_id)

        assert [item.module.title for item in listings] == [
            "Atomic Layer Deposition",
            "CRISPR Delivery",
            "Empty Topic",
            "Liposome Engineering",
        ]
        assert [item.completed for item in listings] == [False, True, False, False]

    @pytest.mark.asyncio
    async def test_quiz_tiers_and_categories(
        self,
        seeded_store: SqlRecordStore,
        module_repository: ModuleRepository,
        progress_repository: ProgressRepository,
    ) -> None:
        use_case = CatalogUseCase(module_repository, progress_repository)
        quizzes = {item.module.slug: item for item in await use_case.list_quizzes()}

        assert quizzes["atomic-layer-deposition"].tier == "Intermediate"
        assert quizzes["atomic-layer-deposition"].category == "Nanomaterials"
        assert quizzes["liposome-engineering"].tier == "Advanced"
        assert quizzes["liposome-engineering"].category == "Liposome"
        assert quizzes["crispr-delivery"].tier == "Foundation"


class TestLectureUseCase:
    @pytest.mark.asyncio
    async def test_open_records_last_opened(
        self,
        user_id: UserId,
        progress_repository: ProgressRepository,
        lecture_use_case: LectureUseCase,
    ) -> None:
        lecture = await lecture_use_case.open_lecture(user_id, "atomic-layer-deposition")

        assert lecture is not None
        assert len(lecture.key_terms) == 3
        progress = await progress_repository.find(user_id, ModuleId("m-ald"))
        assert progress is not None
        assert progress.last_opened is not None
        assert progress.last_opened.replace(tzinfo=UTC) == OPENED_AT
        assert progress.completed is False

    @pytest.mark.asyncio
    async def test_open_unknown_slug(
        self, user_id: UserId, lecture_use_case: LectureUseCase
    ) -> None:
        assert await lecture_use_case.open_lecture(user_id, "missing") is None

    @pytest.mark.asyncio
    async def test_mark_complete_keeps_score_and_opened(
        self,
        user_id: UserId,
        progress_repository: ProgressRepository,
        lecture_use_case: LectureUseCase,
    ) -> None:
        await lecture_use_case.open_lecture(user_id, "atomic-layer-deposition")
        saved = await lecture_use_case.mark_complete(user_id, "atomic-layer-deposition")

        assert (saved.completed, saved.progress) == (True, 100)
        assert saved.last_opened is not None

    @pytest.mark.asyncio
    async def test_mark_complete_unknown_slug(
        self, user_id: UserId, lecture_use_case: LectureUseCase
    ) -> None:
        with pytest.raises(LearningModuleNotFoundError):
            await lecture_use_case.mark_complete(user_id, "missing")


class TestDashboardUseCase:
    @pytest.mark.asyncio
    async def test_dashboard_summary(
        self,
        user_id: UserId,
        profile_repository: ProfileRepository,
        module_repository: ModuleRepository,
        progress_repository: ProgressRepository,
        lecture_use_case: LectureUseCase,
    ) -> None:
        await lecture_use_case.mark_complete(user_id, "crispr-delivery")
        await lecture_use_case.open_lecture(user_id, "atomic-layer-deposition")
        use_case = DashboardUseCase(profile_repository, module_repository, progress_repository)

        view = await use_case.get_dashboard(user_id)

        assert view.profile is not None
        assert view.profile.full_name == "Ada Lovelace"
        assert (view.total_modules, view.completed_modules) == (4, 1)
        assert view.mastery_percentage == 25
        assert view.recent is not None
        assert view.recent.module.slug == "atomic-layer-deposition"

    @pytest.mark.asyncio
    async def test_dashboard_degrades_on_store_failure(
        self,
        user_id: UserId,
        engine: AsyncEngine,
        profile_repository: ProfileRepository,
        module_repository: ModuleRepository,
        progress_repository: ProgressRepository,
    ) -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        use_case = DashboardUseCase(profile_repository, module_repository, progress_repository)

        view = await use_case.get_dashboard(user_id)

        assert view.profile is None
        assert (view.total_modules, view.completed_modules, view.mastery_percentage) == (0, 0, 0)
        assert view.recent is None


class TestAnalyticsUseCase:
    @pytest.mark.asyncio
    async def test_domain_stats_and_accuracy(
        self,
        user_id: UserId,
        profile_repository: ProfileRepository,
        module_repository: ModuleRepository,
        progress_repository: ProgressRepository,
        attempt_repository: AttemptRepository,
        lecture_use_case: LectureUseCase,
    ) -> None:
        await lecture_use_case.mark_complete(user_id, "atomic-layer-deposition")
        for question_id, correct in (("q-1", True), ("q-2", True), ("q-3", False), ("q-x", True)):
            await attempt_repository.add(
                QuizAttempt(user_id, QuestionId(question_id), OptionLabel("a"), correct)
            )
        use_case = AnalyticsUseCase(
            profile_repository, module_repository, progress_repository, attempt_repository
        )

        view = await use_case.get_analytics(user_id)

        stats = {s.domain_name: (s.completed, s.total, s.percentage) for s in view.domain_stats}
        assert stats == {
            "Nanomaterials": (1, 2, 50),
            "Genetic Engineering": (0, 1, 0),
            "Uncategorized": (0, 1, 0),
        }
        assert view.domain_stats[0].domain_name == "Nanomaterials"
        assert view.total_completed == 1
        assert view.accuracy == 75


class TestProfileUseCase:
    @pytest.mark.asyncio
    async def test_update_keeps_progression_fields(
        self, store: SqlRecordStore, user_id: UserId, profile_repository: ProfileRepository
    ) -> None:
        await store.insert("profiles", {"id": user_id.value, "xp": 900, "level": 2, "streak": 4})
        use_case = ProfileUseCase(profile_repository)

        profile = await use_case.update_profile(user_id, full_name="Ada", role="Student")

        assert (profile.full_name, profile.role) == ("Ada", "Student")
        assert (profile.xp, profile.level, profile.streak) == (900, 2, 4)

    @pytest.mark.asyncio
    async def test_update_creates_missing_profile(
        self, user_id: UserId, profile_repository: ProfileRepository
    ) -> None:
        use_case = ProfileUseCase(profile_repository)
        profile = await use_case.update_profile(user_id, institution="MIT")

        assert profile.institution == "MIT"
        assert (profile.xp, profile.level) == (0, 1)

    @pytest.mark.asyncio
    async def test_update_too_long(
        self, user_id: UserId, profile_repository: ProfileRepository
    ) -> None:
        with pytest.raises(ValidationError):
            await ProfileUseCase(profile_repository).update_profile(user_id, role="x" * 201)

    @pytest.mark.asyncio
    async def test_get_missing_profile(
        self, user_id: UserId, profile_repository: ProfileRepository
    ) -> None:
        with pytest.raises(ProfileNotFoundError):
            await ProfileUseCase(profile_repository).get_profile(user_id)
