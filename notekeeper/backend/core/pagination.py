"""
Pagination Utilities.

Page-based pagination for list endpoints and the pager math shared by the
REST collection and the admin list.
"""

import math
from dataclasses import dataclass
from typing import Any

from fastapi import Query

from notekeeper.backend.schemas.admin import PagerLink, PagerModel
from notekeeper.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata

DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100


# =============================================================================
# Pagination Parameters
# =============================================================================


@dataclass
class PaginationParams:
    """Pagination parameters extracted from query string."""

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        """Number of items skipped before this page."""
        return (self.page - 1) * self.per_page


def get_pagination_params(
    page: int = Query(
        default=1,
        ge=1,
        description="Current page of the collection",
    ),
    per_page: int | None = Query(
        default=None,
        ge=1,
        le=MAX_PER_PAGE,
        description="Maximum number of items to be returned in result set",
    ),
) -> PaginationParams:
    """
    FastAPI dependency for pagination parameters.

    Usage:
        @router.get("/items")
        async def list_items(
            pagination: PaginationParams = Depends(get_pagination_params),
        ):
            ...
    """
    from notekeeper.backend.core.config import get_app_config

    defaults = get_app_config().application.pagination
    if per_page is None:
        per_page = defaults.default_per_page
    return PaginationParams(page=page, per_page=min(per_page, defaults.max_per_page))


def total_pages(total: int, per_page: int) -> int:
    """
    Number of pages needed for a result set.

    An empty result set has zero pages.
    """
    if total <= 0 or per_page <= 0:
        return 0
    return math.ceil(total / per_page)


# =============================================================================
# Paginated Response Builder
# =============================================================================


def create_paginated_response(
    items: list[dict[str, Any]],
    total: int,
    page: int,
    per_page: int,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Args:
        items: Already serialized items for the current page
        total: Total count of matching items
        page: Current page number
        per_page: Page size
        request_id: Request ID for metadata

    Returns:
        Dict matching PaginatedResponse structure
    """
    pagination = PaginationInfo(
        total=total,
        total_pages=total_pages(total, per_page),
        page=page,
        per_page=per_page,
        has_more=(page - 1) * per_page + len(items) < total,
    )

    response = PaginatedResponse(
        data=items,
        pagination=pagination,
        metadata=ResponseMetadata(request_id=request_id),
    )

    return response.model_dump(mode="json")


# =============================================================================
# Pager Window
# =============================================================================


def build_page_window(
    total: int,
    per_page: int,
    current_page: int,
    max_visible: int = 10,
    always_visible: int = 2,
) -> PagerModel | None:
    """
    Compute the numbered links for a pager.

    The first and last `always_visible` pages are always listed. Between
    them a window of up to `max_visible` pages follows the current page,
    and an ellipsis marker (page=None) stands in for each skipped run.

    Args:
        total: Total number of items
        per_page: Items per page
        current_page: Requested page, clamped to the valid range
        max_visible: Length of the moving window
        always_visible: Pages pinned at each end

    Returns:
        Pager state, or None when everything fits on one page
    """
    if total <= 0 or total <= per_page:
        return None

    pages = max(1, total_pages(total, per_page))
    current = max(1, min(current_page, pages))

    start = max(1, current - max_visible // 2)
    end = min(pages, start + max_visible - 1)
    if end - start + 1 < max_visible:
        start = max(1, end - max_visible + 1)

    links: list[PagerLink] = []

    def add(page: int) -> None:
        links.append(PagerLink(page=page, current=page == current))

    for page in range(1, min(always_visible, pages) + 1):
        add(page)

    if start > always_visible + 1:
        links.append(PagerLink(page=None))

    for page in range(start, end + 1):
        if page <= always_visible or page > pages - always_visible:
            continue
        add(page)

    if end < pages - always_visible:
        links.append(PagerLink(page=None))

    for page in range(max(pages - always_visible + 1, always_visible + 1), pages + 1):
        add(page)

    return PagerModel(
        total=total,
        per_page=per_page,
        current_page=current,
        total_pages=pages,
        first_page=1 if current > 1 else None,
        prev_page=current - 1 if current > 1 else None,
        next_page=current + 1 if current < pages else None,
        last_page=pages if current < pages else None,
        links=links,
    )
