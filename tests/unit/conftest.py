"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from notekeeper.backend.schemas.note import NoteRecord


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    return session


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def make_note() -> Callable[..., NoteRecord]:
    """
    Factory for stored note records.

    Usage:
        def test_something(make_note):
            note = make_note(id=3, title="Three")
    """

    def _make(**overrides: Any) -> NoteRecord:
        stamp = datetime(2026, 1, 15, 9, 30, 0)
        values: dict[str, Any] = {
            "id": 1,
            "user_id": 7,
            "title": "Stored title",
            "content": "<p>Stored content</p>",
            "status": "draft",
            "created_at": stamp,
            "updated_at": stamp,
        }
        values.update(overrides)
        return NoteRecord(**values)

    return _make


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
