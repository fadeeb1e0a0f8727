"""
Note Model.

Table definition for notes.
"""

from enum import StrEnum

from sqlalchemy import CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.backend.models.base import Base, IntegerIdMixin, TimestampMixin


class NoteStatus(StrEnum):
    """Allowed note statuses."""

    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


NOTE_STATUSES: tuple[str, ...] = tuple(status.value for status in NoteStatus)


class Note(IntegerIdMixin, TimestampMixin, Base):
    """
    Note database model.

    A note belongs to an external user (user_id) and moves between
    draft, active and archived. Archiving is the soft-delete path.
    """

    __tablename__ = "notes"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'active', 'archived')",
            name="ck_notes_status",
        ),
        Index("ix_notes_user_status", "user_id", "status"),
        # Ids are never reused after a delete
        {"sqlite_autoincrement": True},
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=NoteStatus.DRAFT.value,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, status={self.status!r})>"
