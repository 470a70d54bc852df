"""
User endpoints for API v1.

Provide registration and renaming of users.  Registration is the only
route that does not require the ``username`` header.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from series_tracker_api.app.core.exceptions import ConflictError
from series_tracker_api.app.core.security import get_current_user
from series_tracker_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from series_tracker_api.app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate) -> UserRead:
    """Register a new user.

    Returns HTTP 400 if the username is already taken.
    """
    try:
        return await UserService.create_user(user)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("", response_model=UserRead)
async def update_user(
    body: UserUpdate,
    current_user: UserRead = Depends(get_current_user),
) -> UserRead:
    """Rename the calling user and return the updated record."""
    return await UserService.update_name(current_user, body.name)
