"""
Note Schemas.

Pydantic schemas for the note record and for API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NoteRecord(BaseModel):
    """A note as stored, returned by the repository."""

    id: int
    user_id: int
    title: str
    content: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        description="Note title",
        examples=["My First Note"],
    )
    content: str | None = Field(
        default=None,
        description="Note content, a safe subset of HTML is kept",
        examples=["<p>This is the content of my note.</p>"],
    )
    status: str | None = Field(
        default=None,
        description="draft, active or archived (case-insensitive)",
        examples=["draft"],
    )


class NoteUpdate(BaseModel):
    """Schema for updating an existing note. Omitted fields keep their value."""

    title: str | None = Field(default=None, description="Note title")
    content: str | None = Field(default=None, description="Note content")
    status: str | None = Field(default=None, description="Note status")


class Link(BaseModel):
    href: str


class NoteLinks(BaseModel):
    """Hypermedia references for a note."""

    self_: list[Link] = Field(alias="self")
    collection: list[Link]
    author: list[Link]

    model_config = ConfigDict(populate_by_name=True)


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: int = Field(description="Note unique identifier")
    author: int = Field(description="ID of the user who created the note")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    status: str = Field(description="Note status")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")
    links: NoteLinks = Field(alias="_links")

    model_config = ConfigDict(populate_by_name=True)


class NoteDeleteResponse(BaseModel):
    """Confirmation returned after a hard delete."""

    deleted: bool = True
    previous: NoteResponse
