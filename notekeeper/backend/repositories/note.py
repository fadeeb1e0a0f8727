"""
Note Repository.

Data access layer for notes. Adds filtered, sorted and paginated listing
on top of the validated CRUD operations from BaseRepository.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from sqlalchemy import ColumnElement, and_, or_, true

from notekeeper.backend.core.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.base import BaseRepository
from notekeeper.backend.repositories.rules import NOTE_RULES
from notekeeper.backend.repositories.store import FieldType
from notekeeper.backend.schemas.note import NoteRecord

DEFAULT_ORDER_BY = "created_at"
ORDERABLE_COLUMNS: tuple[str, ...] = ("created_at", "updated_at", "title")


@dataclass
class NoteFilter:
    """
    Listing criteria for notes.

    search and status narrow the result set; the rest only shape the
    page that is returned. Use normalized() before building a query.
    """

    search: str | None = None
    status: str | None = None
    user_id: int | None = None
    page: int | None = 1
    per_page: int | None = DEFAULT_PER_PAGE
    order_by: str | None = DEFAULT_ORDER_BY
    order: str | None = "desc"

    def normalized(self) -> "NoteFilter":
        """Return a copy with defaults applied and values clamped."""
        search = (self.search or "").strip() or None
        status = (self.status or "").strip().lower() or None
        user_id = self.user_id if self.user_id and self.user_id > 0 else None
        page = max(1, self.page or 1)
        per_page = min(MAX_PER_PAGE, max(1, self.per_page or DEFAULT_PER_PAGE))
        order_by = self.order_by if self.order_by in ORDERABLE_COLUMNS else DEFAULT_ORDER_BY
        order = "asc" if (self.order or "").lower() == "asc" else "desc"
        return NoteFilter(
            search=search,
            status=status,
            user_id=user_id,
            page=page,
            per_page=per_page,
            order_by=order_by,
            order=order,
        )

    @property
    def offset(self) -> int:
        return (max(1, self.page or 1) - 1) * (self.per_page or DEFAULT_PER_PAGE)


class NoteRepository(BaseRepository[NoteRecord]):
    """
    Repository for notes.

    list() and count_matching() share one predicate builder so the page
    contents and the total can never disagree.
    """

    table = Note.__table__
    record_schema = NoteRecord
    rules = NOTE_RULES
    field_types: ClassVar[dict[str, FieldType]] = {
        "user_id": FieldType.INTEGER,
        "title": FieldType.TEXT,
        "content": FieldType.TEXT,
        "status": FieldType.TEXT,
        "created_at": FieldType.DATETIME,
        "updated_at": FieldType.DATETIME,
    }

    def build_predicate(self, criteria: NoteFilter) -> ColumnElement[bool]:
        """
        Build the WHERE expression for a filter.

        Args:
            criteria: Normalized filter

        Returns:
            Composable SQLAlchemy boolean expression
        """
        columns = self.table.c
        clauses: list[ColumnElement[bool]] = []

        if criteria.status:
            clauses.append(columns.status == criteria.status)

        if criteria.user_id:
            clauses.append(columns.user_id == criteria.user_id)

        if criteria.search:
            clauses.append(
                or_(
                    columns.title.icontains(criteria.search, autoescape=True),
                    columns.content.icontains(criteria.search, autoescape=True),
                )
            )

        return and_(*clauses) if clauses else true()

    def _ordering(self, criteria: NoteFilter) -> list[Any]:
        column = self.table.c[criteria.order_by]
        # id breaks ties so page boundaries stay stable
        if criteria.order == "asc":
            return [column.asc(), self.table.c.id.asc()]
        return [column.desc(), self.table.c.id.desc()]

    async def list(self, criteria: NoteFilter | None = None) -> list[NoteRecord]:
        """
        Get one page of notes matching a filter.

        Args:
            criteria: Search, status, paging and sorting options

        Returns:
            Notes in the requested order
        """
        criteria = (criteria or NoteFilter()).normalized()
        rows = await self.store.select_where(
            self.build_predicate(criteria),
            order_by=self._ordering(criteria),
            limit=criteria.per_page,
            offset=criteria.offset,
        )
        return [self._to_record(row) for row in rows]

    async def count_matching(self, criteria: NoteFilter | None = None) -> int:
        """
        Count all notes matching a filter, ignoring paging and sorting.

        Args:
            criteria: Same filter passed to list()

        Returns:
            Total number of matching notes
        """
        criteria = (criteria or NoteFilter()).normalized()
        return await self.store.count_where(self.build_predicate(criteria))
