"""
Note Service.

Business logic layer for notes. Translates API input into repository
calls, decides when absence is an error, merges partial updates with the
stored record, and shapes records for API responses.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import NotFoundError, StoreError
from notekeeper.backend.core.pagination import total_pages
from notekeeper.backend.core.utils import to_rfc3339
from notekeeper.backend.repositories.note import NoteFilter, NoteRepository
from notekeeper.backend.schemas.note import (
    Link,
    NoteCreate,
    NoteLinks,
    NoteRecord,
    NoteResponse,
    NoteUpdate,
)
from notekeeper.backend.services.base import BaseService


@dataclass(frozen=True)
class NoteLinkBuilder:
    """Builds hypermedia references from external base URLs."""

    collection_url: str
    author_base_url: str

    def self_url(self, note_id: int) -> str:
        return f"{self.collection_url.rstrip('/')}/{note_id}"

    def author_url(self, user_id: int) -> str:
        return f"{self.author_base_url.rstrip('/')}/{user_id}"


@dataclass
class NotePage:
    """One page of notes plus the totals for the whole filter."""

    items: list[NoteRecord]
    total: int
    total_pages: int
    page: int
    per_page: int


class NoteService(BaseService):
    """
    Service for note business logic.

    The repository reports absence as None/False; this layer turns it into
    NotFoundError. Validation and store errors from the repository pass
    through as typed application errors for the exception handlers.
    """

    def __init__(self, session: AsyncSession, links: NoteLinkBuilder | None = None) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.links = links

    async def _require(self, note_id: int) -> NoteRecord:
        note = await self.repo.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def list_notes(self, criteria: NoteFilter) -> NotePage:
        """
        List one page of notes with totals for pagination.

        Args:
            criteria: Search, status, paging and sorting options

        Returns:
            NotePage with items, total and total_pages
        """
        criteria = criteria.normalized()
        items = await self.repo.list(criteria)
        total = await self.repo.count_matching(criteria)

        self._log_debug(
            "Notes listed",
            page=criteria.page,
            per_page=criteria.per_page,
            total=total,
        )
        return NotePage(
            items=items,
            total=total,
            total_pages=total_pages(total, criteria.per_page),
            page=criteria.page,
            per_page=criteria.per_page,
        )

    async def get_note(self, note_id: int) -> NoteRecord:
        """
        Get a note by ID.

        Raises:
            ValidationError: If the ID is not positive
            NotFoundError: If note not found
        """
        return await self._require(note_id)

    async def create_note(self, data: NoteCreate, user_id: int) -> NoteRecord:
        """
        Create a new note owned by user_id.

        Args:
            data: Note creation data
            user_id: Identity of the caller

        Returns:
            Created note as stored

        Raises:
            ValidationError: If a field fails its rule
            StoreError: If the write fails
        """
        self._log_operation("Creating note", user_id=user_id)

        note_id = await self.repo.create({
            "user_id": user_id,
            "title": data.title,
            "content": data.content,
            "status": data.status,
        })

        note = await self.repo.get(note_id)
        if note is None:
            raise StoreError("Created note could not be read back.")

        self._log_debug("Note created", note_id=note_id)
        return note

    async def update_note(self, note_id: int, data: NoteUpdate) -> NoteRecord:
        """
        Update an existing note.

        Fields omitted from data (or sent as null) keep the stored value.

        Raises:
            NotFoundError: If note not found
            ValidationError: If a field fails its rule
            StoreError: If the write fails
        """
        existing = await self._require(note_id)
        provided = data.model_dump(exclude_none=True)

        merged = {
            "title": provided.get("title", existing.title),
            "content": provided.get("content", existing.content),
            "status": provided.get("status", existing.status),
        }

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=sorted(provided),
        )
        changed = await self.repo.update(note_id, merged)
        self._log_debug("Note update applied", note_id=note_id, changed=changed)

        return await self._require(note_id)

    async def delete_note(self, note_id: int) -> NoteRecord:
        """
        Permanently delete a note.

        Returns:
            The note as it was before deletion

        Raises:
            NotFoundError: If note not found
            StoreError: If no row was removed
        """
        existing = await self._require(note_id)

        self._log_operation("Deleting note", note_id=note_id)
        if not await self.repo.delete(note_id):
            raise StoreError("Failed to delete note.")

        return existing

    async def archive_note(self, note_id: int) -> NoteRecord:
        """
        Archive a note (soft delete).

        Raises:
            NotFoundError: If note not found
        """
        await self._require(note_id)

        self._log_operation("Archiving note", note_id=note_id)
        await self.repo.soft_delete(note_id)

        return await self._require(note_id)

    def to_response(self, note: NoteRecord) -> NoteResponse:
        """
        Shape a stored note for API output.

        Renames user_id to author, marks timestamps as UTC and adds
        self, collection and author links.
        """
        if self.links is None:
            raise RuntimeError("NoteService needs a NoteLinkBuilder to format responses")

        return NoteResponse(
            id=note.id,
            author=note.user_id,
            title=note.title,
            content=note.content,
            status=note.status,
            created_at=to_rfc3339(note.created_at),
            updated_at=to_rfc3339(note.updated_at),
            links=NoteLinks(
                self_=[Link(href=self.links.self_url(note.id))],
                collection=[Link(href=self.links.collection_url)],
                author=[Link(href=self.links.author_url(note.user_id))],
            ),
        )
