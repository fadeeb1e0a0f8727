"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.database import get_db_session
from notekeeper.backend.core.exceptions import AuthenticationError
from notekeeper.backend.core.logging import get_logger

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(request: Request, x_request_id: str | None = Header(None)) -> str:
    """
    Request ID assigned by RequestContextMiddleware, else the header, else a new one.

    Used for request tracing and correlation.
    """
    state_id = getattr(request.state, "request_id", None)
    return state_id or x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user_id(x_user_id: str | None = Header(None)) -> int:
    """
    Identity of the caller, forwarded by the upstream gateway.

    Raises:
        AuthenticationError: If the header is missing or not a positive integer
    """
    if x_user_id is None or not x_user_id.strip().isdecimal() or int(x_user_id) <= 0:
        logger.warning("Rejected request without a valid user identity")
        raise AuthenticationError("A valid X-User-ID header is required")
    return int(x_user_id)


CurrentUserId = Annotated[int, Depends(get_current_user_id)]


def resolve_url(request: Request, url: str) -> str:
    """Absolute URL for a configured value, relative paths resolve against the request."""
    if url.startswith(("http://", "https://")):
        return url
    return str(request.base_url).rstrip("/") + "/" + url.lstrip("/")


def get_notes_collection_url(request: Request) -> str:
    """Absolute URL of the notes collection for the current request."""
    prefix = get_app_config().application.api_prefix
    return resolve_url(request, f"{prefix}/notes")
