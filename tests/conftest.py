"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from nanobio.database import Base, build_engine, create_all
from nanobio.domain.common.value_objects import UserId
from nanobio.infrastructure.catalog.repositories.key_term_repository import KeyTermRepository
from nanobio.infrastructure.catalog.repositories.module_repository import ModuleRepository
from nanobio.infrastructure.catalog.repositories.question_repository import QuestionRepository
from nanobio.infrastructure.progress.repositories.attempt_repository import AttemptRepository
from nanobio.infrastructure.progress.repositories.progress_repository import ProgressRepository
from nanobio.infrastructure.progression.repositories.profile_repository import (
    ProfileRepository,
)
from nanobio.infrastructure.store import InMemoryChangeFeed, SqlRecordStore

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_USER_ID = "user-1"
OTHER_USER_ID = "user-2"

ALD_TITLE = "Atomic Layer Deposition"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    test_engine = build_engine(TEST_DATABASE_URL)
    await create_all(test_engine)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
def change_feed() -> InMemoryChangeFeed:
    return InMemoryChangeFeed()


@pytest.fixture
def store(
    session_factory: async_sessionmaker[AsyncSession], change_feed: InMemoryChangeFeed
) -> SqlRecordStore:
    return SqlRecordStore(session_factory, change_feed=change_feed)


@pytest.fixture
def user_id() -> UserId:
    return UserId(TEST_USER_ID)


@pytest.fixture
def module_repository(store: SqlRecordStore) -> ModuleRepository:
    return ModuleRepository(store)


@pytest.fixture
def question_repository(store: SqlRecordStore) -> QuestionRepository:
    return QuestionRepository(store)


@pytest.fixture
def key_term_repository(store: SqlRecordStore) -> KeyTermRepository:
    return KeyTermRepository(store)


@pytest.fixture
def progress_repository(store: SqlRecordStore) -> ProgressRepository:
    return ProgressRepository(store)


@pytest.fixture
def attempt_repository(store: SqlRecordStore) -> AttemptRepository:
    return AttemptRepository(store)


@pytest.fixture
def profile_repository(store: SqlRecordStore) -> ProfileRepository:
    return ProfileRepository(store)


def module_row(
    id: str,
    title: str,
    slug: str,
    domain: str | None = None,
    difficulty: int = 1,
    **extra: Any,
) -> dict[str, Any]:
    return {
        "id": id,
        "title": title,
        "slug": slug,
        "domain": domain,
        "difficulty": difficulty,
        "estimated_minutes": 15,
        "description": f"About {title}",
        "content": f"# {title}",
        **extra,
    }


def question_row(
    id: str, topic: str, correct_answer: str, difficulty: int = 1, **extra: Any
) -> dict[str, Any]:
    return {
        "id": id,
        "topic": topic,
        "question": f"Question {id}?",
        "option_a": "Alpha",
        "option_b": "Beta",
        "option_c": "Gamma",
        "option_d": "Delta",
        "correct_answer": correct_answer,
        "explanation": f"Because {correct_answer}",
        "difficulty": difficulty,
        **extra,
    }


async def seed_profile(store: SqlRecordStore, user_id: str = TEST_USER_ID, **fields: Any) -> None:
    await store.insert("profiles", {"id": user_id, "full_name": "Ada Lovelace", **fields})


@pytest_asyncio.fixture
async def seeded_store(store: SqlRecordStore) -> SqlRecordStore:
    """
    Store with one profile and a small catalog.

    The ALD module has three questions whose correct answers are a, b and c,
    stored out of difficulty order.
    """
    await seed_profile(store)
    await seed_profile(store, OTHER_USER_ID, full_name="Grace Hopper")
    for row in (
        module_row("m-ald", ALD_TITLE, "atomic-layer-deposition", "Nanomaterials", 2),
        module_row("m-crispr", "CRISPR Delivery", "crispr-delivery", "Genetic Engineering", 1),
        module_row("m-lipo", "Liposome Engineering", "liposome-engineering", None, 3),
        module_row("m-empty", "Empty Topic", "empty-topic", "Nanomaterials", 1),
    ):
        await store.insert("modules", row)
    for row in (
        question_row("q-3", ALD_TITLE, "option_c", difficulty=3),
        question_row("q-1", ALD_TITLE, "a", difficulty=1),
        question_row("q-2", ALD_TITLE, "B", difficulty=2),
        question_row("q-x", "CRISPR Delivery", "d", difficulty=1),
    ):
        await store.insert("questions", row)
    for index, (term, definition) in enumerate(
        (
            ("Precursor", "A reactive gas pulsed into the chamber"),
            ("Purge", "Inert gas flush between pulses"),
            ("Conformality", "Uniform coverage over 3D features"),
        ),
        start=1,
    ):
        await store.insert(
            "key_terms",
            {"id": f"k-{index}", "module_id": "m-ald", "term": term, "definition": definition},
        )
    return store
