from dependency_injector import containers, providers

from nanobio.application.catalog.use_cases.catalog_use_case import CatalogUseCase
from nanobio.application.catalog.use_cases.lecture_use_case import LectureUseCase
from nanobio.application.learning.flashcard_session_engine import FlashcardSessionEngine
from nanobio.application.learning.quiz_session_engine import QuizSessionEngine
from nanobio.application.learning.session_registry import LearningSessionRegistry
from nanobio.application.progress.use_cases.analytics_use_case import AnalyticsUseCase
from nanobio.application.progress.use_cases.dashboard_use_case import DashboardUseCase
from nanobio.application.progression.ledger import ProgressionLedger
from nanobio.application.progression.use_cases.profile_use_case import ProfileUseCase
from nanobio.config import get_settings
from nanobio.database import get_session_factory
from nanobio.infrastructure.catalog.repositories.key_term_repository import KeyTermRepository
from nanobio.infrastructure.catalog.repositories.module_repository import ModuleRepository
from nanobio.infrastructure.catalog.repositories.question_repository import QuestionRepository
from nanobio.infrastructure.identity.token_service import TokenService
from nanobio.infrastructure.progress.repositories.attempt_repository import AttemptRepository
from nanobio.infrastructure.progress.repositories.progress_repository import ProgressRepository
from nanobio.infrastructure.progression.repositories.profile_repository import ProfileRepository
from nanobio.infrastructure.store import (
    InMemoryChangeFeed,
    PostgrestRecordStore,
    SqlRecordStore,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)

    # Change notifications shared by every store write and ledger
    change_feed = providers.Singleton(InMemoryChangeFeed)

    # Record store, chosen by STORE_BACKEND
    store = providers.Selector(
        settings.provided.STORE_BACKEND,
        sql=providers.Singleton(
            SqlRecordStore,
            session_factory=providers.Callable(get_session_factory, settings),
            change_feed=change_feed,
        ),
        postgrest=providers.Singleton(
            PostgrestRecordStore,
            base_url=settings.provided.SUPABASE_URL,
            api_key=settings.provided.SUPABASE_SERVICE_KEY,
            change_feed=change_feed,
            timeout=settings.provided.STORE_TIMEOUT_SECONDS,
        ),
    )

    token_service = providers.Singleton(TokenService.from_settings, settings)

    # Repositories
    module_repository = providers.Factory(ModuleRepository, store=store)
    question_repository = providers.Factory(QuestionRepository, store=store)
    key_term_repository = providers.Factory(KeyTermRepository, store=store)
    progress_repository = providers.Factory(ProgressRepository, store=store)
    attempt_repository = providers.Factory(AttemptRepository, store=store)
    profile_repository = providers.Factory(ProfileRepository, store=store)

    # Catalog use cases
    catalog_use_case = providers.Factory(
        CatalogUseCase,
        module_repository=module_repository,
        progress_repository=progress_repository,
    )
    lecture_use_case = providers.Factory(
        LectureUseCase,
        module_repository=module_repository,
        key_term_repository=key_term_repository,
        progress_repository=progress_repository,
    )

    # Progress use cases
    dashboard_use_case = providers.Factory(
        DashboardUseCase,
        profile_repository=profile_repository,
        module_repository=module_repository,
        progress_repository=progress_repository,
    )
    analytics_use_case = providers.Factory(
        AnalyticsUseCase,
        profile_repository=profile_repository,
        module_repository=module_repository,
        progress_repository=progress_repository,
        attempt_repository=attempt_repository,
    )

    # Progression
    profile_use_case = providers.Factory(ProfileUseCase, profile_repository=profile_repository)

    # Per-session actors; the registry supplies user_id (and the ledger for flashcards)
    progression_ledger = providers.Factory(
        ProgressionLedger,
        profile_repository=profile_repository,
        change_feed=change_feed,
    )
    quiz_session_engine = providers.Factory(
        QuizSessionEngine,
        module_repository=module_repository,
        question_repository=question_repository,
        attempt_repository=attempt_repository,
        progress_repository=progress_repository,
    )
    flashcard_session_engine = providers.Factory(
        FlashcardSessionEngine,
        key_term_repository=key_term_repository,
    )

    # Live sessions and ledgers, shared across requests
    learning_sessions = providers.Singleton(
        LearningSessionRegistry,
        ledger_factory=progression_ledger.provider,
        quiz_engine_factory=quiz_session_engine.provider,
        flashcard_engine_factory=flashcard_session_engine.provider,
    )


# Initialize container
container = Container()
