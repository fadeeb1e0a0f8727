"""
Admin Endpoints.

View model for the server-rendered notes list screen.
"""

from fastapi import APIRouter, Query

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.dependencies import DbSession, RequestId
from notekeeper.backend.schemas.admin import AdminNotesTable
from notekeeper.backend.schemas.base import ApiResponse, ResponseMetadata
from notekeeper.backend.services.admin import NotesAdminService

router = APIRouter()


@router.get(
    "/notes",
    response_model=ApiResponse[AdminNotesTable],
    summary="Admin notes table",
    description="Rows and pager for the admin notes list, with optional search.",
)
async def admin_notes(
    db: DbSession,
    request_id: RequestId,
    s: str | None = Query(default=None, max_length=200, description="Search term"),
    paged: int = Query(default=1, description="Requested page"),
) -> ApiResponse[AdminNotesTable]:
    """Build the admin notes table."""
    admin = get_app_config().application.admin
    service = NotesAdminService(
        db,
        per_page=admin.per_page,
        max_visible_pages=admin.max_visible_pages,
        always_visible_pages=admin.always_visible_pages,
        excerpt_words=admin.excerpt_words,
    )
    table = await service.build_table(search=s, paged=paged)
    return ApiResponse(
        data=table,
        metadata=ResponseMetadata(request_id=request_id),
    )
