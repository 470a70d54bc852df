"""
Series endpoints for API v1.

All routes act on the series of the user named in the ``username``
header.  A series id that belongs to another user is treated the same
as an unknown id.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from series_tracker_api.app.core.exceptions import NotFoundError
from series_tracker_api.app.core.security import get_current_user
from series_tracker_api.app.schemas.series import EpisodeWatched, SeriesCreate, SeriesRead
from series_tracker_api.app.schemas.user import UserRead
from series_tracker_api.app.services.series_service import SeriesService

router = APIRouter()


@router.post("", response_model=SeriesRead, status_code=status.HTTP_201_CREATED)
async def create_series(
    series_in: SeriesCreate,
    current_user: UserRead = Depends(get_current_user),
) -> SeriesRead:
    """Create a series with ``qt_episodes`` unwatched episodes."""
    return await SeriesService.create_series(current_user.id, series_in)


@router.get("", response_model=List[SeriesRead])
async def list_series(current_user: UserRead = Depends(get_current_user)) -> List[SeriesRead]:
    """Return the caller's series in creation order."""
    return await SeriesService.list_series(current_user.id)


@router.patch("/{series_id}/watched", response_model=SeriesRead, status_code=status.HTTP_201_CREATED)
async def mark_episode_watched(
    series_id: str,
    body: EpisodeWatched,
    current_user: UserRead = Depends(get_current_user),
) -> SeriesRead:
    """Mark one episode as watched and return the updated series.

    Returns HTTP 404 with ``Serie not found`` or ``Invalid episode``
    when the series or the episode does not exist.
    """
    try:
        return await SeriesService.mark_watched(current_user.id, series_id, body.ep_number)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{series_id}/progress", response_class=PlainTextResponse)
async def get_series_progress(
    series_id: str,
    current_user: UserRead = Depends(get_current_user),
) -> PlainTextResponse:
    """Return the watched percentage as a plain-text integer, e.g. ``50``."""
    try:
        progress = await SeriesService.get_progress(current_user.id, series_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PlainTextResponse(str(progress))
