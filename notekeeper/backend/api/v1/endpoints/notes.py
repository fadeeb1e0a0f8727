"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, Query, Request, Response

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.dependencies import (
    CurrentUserId,
    DbSession,
    RequestId,
    get_notes_collection_url,
    resolve_url,
)
from notekeeper.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from notekeeper.backend.repositories.note import NoteFilter
from notekeeper.backend.schemas.base import ApiResponse, ResponseMetadata
from notekeeper.backend.schemas.note import (
    NoteCreate,
    NoteDeleteResponse,
    NoteResponse,
    NoteUpdate,
)
from notekeeper.backend.services.note import NoteLinkBuilder, NoteService

router = APIRouter()


def get_link_builder(request: Request) -> NoteLinkBuilder:
    """Link builder rooted at the current request's base URL."""
    links = get_app_config().application.links
    return NoteLinkBuilder(
        collection_url=get_notes_collection_url(request),
        author_base_url=resolve_url(request, links.author_base_url),
    )


Links = Annotated[NoteLinkBuilder, Depends(get_link_builder)]


@router.get(
    "",
    summary="List notes (paginated)",
    description=(
        "Get a page of notes filtered by search term and status. "
        "Totals are returned in the pagination block and in the "
        "X-Total-Count / X-Total-Pages headers."
    ),
)
async def list_notes(
    response: Response,
    db: DbSession,
    request_id: RequestId,
    links: Links,
    pagination: PaginationParams = Depends(get_pagination_params),
    search: str | None = Query(
        default=None,
        max_length=200,
        description="Limit results to those matching a string in the title or content",
    ),
    status: Literal["draft", "active", "archived"] | None = Query(
        default=None,
        description="Limit results to a specific note status",
    ),
    author: int | None = Query(
        default=None,
        ge=1,
        description="Limit results to notes owned by this user",
    ),
    orderby: Literal["created_at", "updated_at", "title"] = Query(
        default="created_at",
        description="Sort collection by note attribute",
    ),
    order: Literal["asc", "desc"] = Query(
        default="desc",
        description="Order sort attribute ascending or descending",
    ),
) -> dict[str, Any]:
    """List notes with filtering, sorting and pagination."""
    service = NoteService(db, links)

    page = await service.list_notes(
        NoteFilter(
            search=search,
            status=status,
            user_id=author,
            page=pagination.page,
            per_page=pagination.per_page,
            order_by=orderby,
            order=order,
        )
    )

    response.headers["X-Total-Count"] = str(page.total)
    response.headers["X-Total-Pages"] = str(page.total_pages)

    return create_paginated_response(
        items=[
            service.to_response(note).model_dump(mode="json", by_alias=True)
            for note in page.items
        ],
        total=page.total,
        page=page.page,
        per_page=page.per_page,
        request_id=request_id,
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a new note owned by the calling user.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    request_id: RequestId,
    user_id: CurrentUserId,
    links: Links,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db, links)
    note = await service.create_note(data, user_id=user_id)
    return ApiResponse(
        data=service.to_response(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
    links: Links,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db, links)
    note = await service.get_note(note_id)
    return ApiResponse(
        data=service.to_response(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Replace a note",
    description="Update an existing note. Omitted fields keep their current value.",
)
@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update an existing note. Only provided fields are changed.",
)
async def update_note(
    note_id: int,
    data: NoteUpdate,
    db: DbSession,
    request_id: RequestId,
    links: Links,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db, links)
    note = await service.update_note(note_id, data)
    return ApiResponse(
        data=service.to_response(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[NoteDeleteResponse],
    summary="Delete a note",
    description="Permanently delete a note and return its last state.",
)
async def delete_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
    links: Links,
) -> ApiResponse[NoteDeleteResponse]:
    """Delete a note."""
    service = NoteService(db, links)
    previous = await service.delete_note(note_id)
    return ApiResponse(
        data=NoteDeleteResponse(previous=service.to_response(previous)),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/{note_id}/archive",
    response_model=ApiResponse[NoteResponse],
    summary="Archive a note",
    description="Archive a note (soft delete).",
)
async def archive_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
    links: Links,
) -> ApiResponse[NoteResponse]:
    """Archive a note."""
    service = NoteService(db, links)
    note = await service.archive_note(note_id)
    return ApiResponse(
        data=service.to_response(note),
        metadata=ResponseMetadata(request_id=request_id),
    )
