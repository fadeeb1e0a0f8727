"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    By default, tests use an in-memory SQLite database for speed.
    To test against another database, set the TEST_DATABASE_URL
    environment variable to an async SQLAlchemy URL.

    Every test gets a fresh engine with freshly created tables.
"""

import os
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notekeeper.backend.models import note  # noqa: F401
from notekeeper.backend.models.base import Base


# =============================================================================
# Database Configuration
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Returns TEST_DATABASE_URL if set, otherwise uses in-memory SQLite.
    """
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


def is_sqlite() -> bool:
    """Check if using SQLite database."""
    return "sqlite" in get_test_database_url()


# =============================================================================
# Database Engine Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create the test database engine.

    For SQLite: one shared in-memory connection through StaticPool.
    Tables are created before the test and dropped after it.
    """
    url = get_test_database_url()

    if is_sqlite():
        engine = create_async_engine(
            url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# Database Session Fixtures
# =============================================================================


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Changes are rolled back after the test.

    Usage:
        async def test_create_note(db_session: AsyncSession):
            repo = NoteRepository(db_session)
            note_id = await repo.create({"user_id": 1, "title": "Hi"})
            assert note_id > 0
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
