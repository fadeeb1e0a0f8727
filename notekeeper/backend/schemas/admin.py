"""
Admin Schemas.

View model handed to the admin list renderer: table rows plus pager.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class AdminNoteRow(BaseModel):
    """One row of the admin notes table."""

    id: int
    title: str
    excerpt: str = Field(description="Plain-text content excerpt")
    status_label: str
    created_at: datetime
    edit_query: dict[str, str]
    delete_query: dict[str, str]


class PagerLink(BaseModel):
    """A numbered page link, or an ellipsis marker when page is None."""

    page: int | None
    current: bool = False


class PagerModel(BaseModel):
    """Pager state for the admin table."""

    total: int
    per_page: int
    current_page: int
    total_pages: int
    first_page: int | None = None
    prev_page: int | None = None
    next_page: int | None = None
    last_page: int | None = None
    links: list[PagerLink] = Field(default_factory=list)


class AdminNotesTable(BaseModel):
    """Everything the admin list renderer needs for one request."""

    search: str
    rows: list[AdminNoteRow]
    pager: PagerModel | None = Field(
        default=None,
        description="Absent when every match fits on one page",
    )
