"""
Unit Tests for the Notes Admin Service.
"""

from unittest.mock import AsyncMock, patch

import pytest

from notekeeper.backend.services.admin import ADMIN_PAGE_SLUG, NotesAdminService


@pytest.fixture
def service(mock_db_session: AsyncMock) -> NotesAdminService:
    return NotesAdminService(mock_db_session, per_page=10, excerpt_words=3)


class TestBuildTable:
    """Tests for build_table."""

    @pytest.mark.asyncio
    async def test_rows_are_shaped_for_the_renderer(self, service, make_note):
        note = make_note(id=12, title="Plan", content="<p>one two three four</p>", status="active")

        with patch.object(service.repo, "count_matching", return_value=1), \
             patch.object(service.repo, "list", return_value=[note]):
            table = await service.build_table()

        row = table.rows[0]
        assert row.id == 12
        assert row.excerpt == "one two three…"
        assert row.status_label == "Active"
        assert row.edit_query == {"page": ADMIN_PAGE_SLUG, "edit": "12"}
        assert row.delete_query == {"page": ADMIN_PAGE_SLUG, "delete": "12"}

    @pytest.mark.asyncio
    async def test_no_pager_when_single_page(self, service, make_note):
        with patch.object(service.repo, "count_matching", return_value=3), \
             patch.object(service.repo, "list", return_value=[make_note()]):
            table = await service.build_table(search="plan")

        assert table.pager is None
        assert table.search == "plan"

    @pytest.mark.asyncio
    async def test_pager_and_requested_page(self, service):
        with patch.object(service.repo, "count_matching", return_value=25), \
             patch.object(service.repo, "list", return_value=[]) as mock_list:
            table = await service.build_table(paged=2)

        assert table.pager.total_pages == 3
        assert table.pager.current_page == 2
        assert mock_list.call_args.args[0].page == 2

    @pytest.mark.asyncio
    async def test_out_of_range_page_is_clamped(self, service):
        with patch.object(service.repo, "count_matching", return_value=25), \
             patch.object(service.repo, "list", return_value=[]) as mock_list:
            table = await service.build_table(paged=50)

        assert table.pager.current_page == 3
        assert mock_list.call_args.args[0].page == 3

    @pytest.mark.asyncio
    async def test_search_only_filter(self, service):
        with patch.object(service.repo, "count_matching", return_value=0) as mock_count, \
             patch.object(service.repo, "list", return_value=[]):
            await service.build_table(search="  term  ")

        criteria = mock_count.call_args.args[0]
        assert criteria.search == "term"
        assert criteria.status is None
        assert criteria.order_by == "created_at"
        assert criteria.order == "desc"
