"""
Unit Tests for FastAPI Dependencies.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import Request

from notekeeper.backend.core.dependencies import get_current_user_id, get_request_id, resolve_url
from notekeeper.backend.core.exceptions import AuthenticationError


def _request(base_url: str = "http://test/", request_id: str | None = None) -> MagicMock:
    request = MagicMock(spec=Request)
    request.base_url = base_url
    request.state = SimpleNamespace(request_id=request_id) if request_id else SimpleNamespace()
    return request


class TestGetCurrentUserId:
    """Tests for caller identity extraction."""

    @pytest.mark.asyncio
    async def test_parses_positive_integer(self):
        assert await get_current_user_id("7") == 7

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, "", "abc", "0", "-3", "1.5", "²"])
    async def test_rejects_missing_or_invalid(self, value):
        with pytest.raises(AuthenticationError):
            await get_current_user_id(value)


class TestGetRequestId:
    """Tests for request ID resolution."""

    @pytest.mark.asyncio
    async def test_prefers_middleware_id(self):
        assert await get_request_id(_request(request_id="mw-1"), "header-1") == "mw-1"

    @pytest.mark.asyncio
    async def test_falls_back_to_header(self):
        assert await get_request_id(_request(), "header-1") == "header-1"

    @pytest.mark.asyncio
    async def test_generates_when_absent(self):
        assert len(await get_request_id(_request(), None)) == 36


class TestResolveUrl:
    """Tests for resolve_url."""

    def test_absolute_url_unchanged(self):
        assert resolve_url(_request(), "https://people.example.com/u") == "https://people.example.com/u"

    def test_relative_path_joined_to_base(self):
        assert resolve_url(_request("http://test/"), "/api/v1/users") == "http://test/api/v1/users"
