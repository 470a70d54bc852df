"""
Request guard resolving the calling user.

Callers identify themselves with a ``username`` header.  The value is
trusted as supplied; there are no passwords or tokens.  Every endpoint
except registration depends on ``get_current_user`` so that the
handler only runs for an existing user.
"""

from typing import Optional

from fastapi import Header, HTTPException, status

from series_tracker_api.app.core.exceptions import NotFoundError
from series_tracker_api.app.schemas.user import UserRead
from series_tracker_api.app.services.user_service import UserService


async def get_current_user(username: Optional[str] = Header(None)) -> UserRead:
    """Dependency that retrieves the user named in the ``username`` header.

    Raises HTTP 404 if the header is missing or no user has exactly
    that username.  The returned user carries only its id, name and
    username; handlers that need the series read them separately.
    """
    try:
        return await UserService.get_by_username(username)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
