"""
Notes Admin Service.

Builds the view model for the server-rendered admin notes table. Uses the
same listing and counting as the REST collection so both agree on totals.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.pagination import build_page_window
from notekeeper.backend.core.sanitize import excerpt
from notekeeper.backend.repositories.note import NoteFilter, NoteRepository
from notekeeper.backend.schemas.admin import AdminNoteRow, AdminNotesTable
from notekeeper.backend.schemas.note import NoteRecord
from notekeeper.backend.services.base import BaseService

ADMIN_PAGE_SLUG = "notekeeper-admin"


class NotesAdminService(BaseService):
    """View-model builder for the admin notes list."""

    def __init__(
        self,
        session: AsyncSession,
        per_page: int = 10,
        max_visible_pages: int = 10,
        always_visible_pages: int = 2,
        excerpt_words: int = 15,
    ) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.per_page = per_page
        self.max_visible_pages = max_visible_pages
        self.always_visible_pages = always_visible_pages
        self.excerpt_words = excerpt_words

    def _row(self, note: NoteRecord) -> AdminNoteRow:
        return AdminNoteRow(
            id=note.id,
            title=note.title,
            excerpt=excerpt(note.content, self.excerpt_words),
            status_label=(note.status or "draft").capitalize(),
            created_at=note.created_at,
            edit_query={"page": ADMIN_PAGE_SLUG, "edit": str(note.id)},
            delete_query={"page": ADMIN_PAGE_SLUG, "delete": str(note.id)},
        )

    async def build_table(self, search: str | None = None, paged: int = 1) -> AdminNotesTable:
        """
        Build rows and pager for one admin list request.

        Args:
            search: Free-text search over title and content
            paged: Requested page number

        Returns:
            AdminNotesTable for the renderer
        """
        criteria = NoteFilter(
            search=search,
            page=paged,
            per_page=self.per_page,
        ).normalized()

        total = await self.repo.count_matching(criteria)
        pager = build_page_window(
            total,
            criteria.per_page,
            criteria.page,
            max_visible=self.max_visible_pages,
            always_visible=self.always_visible_pages,
        )
        # Out-of-range pages fall back to the nearest real page
        criteria.page = pager.current_page if pager is not None else 1

        notes = await self.repo.list(criteria)
        self._log_debug("Admin table built", total=total, page=criteria.page)

        return AdminNotesTable(
            search=criteria.search or "",
            rows=[self._row(note) for note in notes],
            pager=pager,
        )
