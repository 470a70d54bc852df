"""
Business logic for series and episode progress.

Series belong to exactly one user and are listed in creation order.
Episodes are created together with their series and are only ever
updated one row at a time, so two clients marking different episodes
of the same user never overwrite each other's changes.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from typing import Any, List, Optional

from series_tracker_api.app.core.db import get_connection
from series_tracker_api.app.core.exceptions import NotFoundError
from series_tracker_api.app.schemas.series import EpisodeRead, SeriesCreate, SeriesRead

SERIES_NOT_FOUND = "Serie not found"
INVALID_EPISODE = "Invalid episode"


def as_whole_number(value: Any) -> Optional[int]:
    """Return ``value`` if it is a plain integer, otherwise ``None``.

    Booleans are rejected even though they subclass ``int``.
    """
    if type(value) is int:
        return value
    return None


def compute_progress(watched: int, total: Optional[int]) -> int:
    """Return the watched share of ``total`` as a whole percentage.

    Halves round away from zero, so 2 of 3 gives 67 and 1 of 8 gives 13.
    A series without episodes reports 0.
    """
    if not total or total < 0:
        return 0
    return (200 * watched + total) // (2 * total)


class SeriesService:
    """Service for creating series, marking episodes and reading progress."""

    @classmethod
    async def create_series(cls, user_id: str, data: SeriesCreate) -> SeriesRead:
        """Create a series for ``user_id`` with episodes ``1..qt_episodes``.

        A ``qt_episodes`` that is not an integer is stored as ``NULL``; a
        missing, zero or negative count produces a series without episodes.
        """
        logger = logging.getLogger(__name__)
        series_id = str(uuid.uuid4())
        qt_episodes = as_whole_number(data.qt_episodes)
        numbers = list(range(1, (qt_episodes or 0) + 1))
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO series (id, user_id, name, qt_episodes) VALUES (?, ?, ?, ?)",
                (series_id, user_id, data.name, qt_episodes),
            )
            cursor.executemany(
                "INSERT INTO episodes (series_id, number, watched) VALUES (?, ?, 0)",
                [(series_id, number) for number in numbers],
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        logger.info("Created series %s with %s episodes for user %s", series_id, len(numbers), user_id)
        return SeriesRead(
            id=series_id,
            name=data.name,
            qt_episodes=qt_episodes,
            episodes=[EpisodeRead(number=number, watched=False) for number in numbers],
        )

    @classmethod
    async def list_series(cls, user_id: str) -> List[SeriesRead]:
        """Return every series owned by ``user_id`` in creation order."""
        conn = get_connection()
        try:
            return cls.load_series(conn.cursor(), user_id)
        finally:
            conn.close()

    @classmethod
    async def mark_watched(cls, user_id: str, series_id: str, ep_number: Any) -> SeriesRead:
        """Mark episode ``ep_number`` of a series as watched.

        Only an integer ``ep_number`` can match; the string ``"1"`` or
        ``true`` do not.  Marking an already watched episode changes
        nothing.  Raises ``NotFoundError`` when the series or the episode
        does not exist, in which case nothing is written.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cls._find_series_row(cursor, user_id, series_id)
            episode = None
            number = as_whole_number(ep_number)
            if number is not None:
                episode = cursor.execute(
                    "SELECT number FROM episodes WHERE series_id = ? AND number = ?",
                    (series_id, number),
                ).fetchone()
            if episode is None:
                logger.info("Episode %r not found in series %s", ep_number, series_id)
                raise NotFoundError(INVALID_EPISODE)
            cursor.execute(
                "UPDATE episodes SET watched = 1 WHERE series_id = ? AND number = ?",
                (series_id, number),
            )
            conn.commit()
            logger.info("Marked episode %s of series %s as watched", number, series_id)
            return cls._row_to_series_read(cursor, row)
        finally:
            conn.close()

    @classmethod
    async def get_progress(cls, user_id: str, series_id: str) -> int:
        """Return the percentage of watched episodes in a series."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cls._find_series_row(cursor, user_id, series_id)
            watched = cursor.execute(
                "SELECT COUNT(*) AS count FROM episodes WHERE series_id = ? AND watched = 1",
                (series_id,),
            ).fetchone()["count"]
            return compute_progress(watched, row["qt_episodes"])
        finally:
            conn.close()

    @classmethod
    def load_series(cls, cursor: sqlite3.Cursor, user_id: str) -> List[SeriesRead]:
        """Read all series of a user with their episodes using an open cursor."""
        rows = cursor.execute(
            "SELECT id, name, qt_episodes FROM series WHERE user_id = ? ORDER BY rowid",
            (user_id,),
        ).fetchall()
        return [cls._row_to_series_read(cursor, row) for row in rows]

    @staticmethod
    def _find_series_row(cursor: sqlite3.Cursor, user_id: str, series_id: str) -> sqlite3.Row:
        row = cursor.execute(
            "SELECT id, name, qt_episodes FROM series WHERE id = ? AND user_id = ?",
            (series_id, user_id),
        ).fetchone()
        if row is None:
            logging.getLogger(__name__).info("Series %s not found for user %s", series_id, user_id)
            raise NotFoundError(SERIES_NOT_FOUND)
        return row

    @staticmethod
    def _row_to_series_read(cursor: sqlite3.Cursor, row: sqlite3.Row) -> SeriesRead:
        """Convert a series row and its episode rows to a ``SeriesRead``."""
        episodes = cursor.execute(
            "SELECT number, watched FROM episodes WHERE series_id = ? ORDER BY number",
            (row["id"],),
        ).fetchall()
        return SeriesRead(
            id=row["id"],
            name=row["name"],
            qt_episodes=row["qt_episodes"],
            episodes=[EpisodeRead(number=ep["number"], watched=bool(ep["watched"])) for ep in episodes],
        )
