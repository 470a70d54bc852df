"""
Business logic for users.

Users are identified by their unique ``username``.  The request guard
only needs the user row, so lookups do not load series; responses that
return a whole user (renaming) read the series when they are built.
"""

import logging
import sqlite3
import uuid
from typing import Optional

from series_tracker_api.app.core.db import get_connection
from series_tracker_api.app.core.exceptions import ConflictError, NotFoundError
from series_tracker_api.app.schemas.user import UserCreate, UserRead
from series_tracker_api.app.services.series_service import SeriesService

USER_EXISTS = "User already exists"
USER_NOT_FOUND = "User not found."


class UserService:
    """Service for registering, looking up and renaming users."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Register a new user with an empty series list.

        Raises ``ConflictError`` if the username is already taken, in
        which case no record is written.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if cls._username_taken(cursor, data.username):
                logger.info("Rejected duplicate username %s", data.username)
                raise ConflictError(USER_EXISTS)
            user_id = str(uuid.uuid4())
            try:
                cursor.execute(
                    "INSERT INTO users (id, name, username) VALUES (?, ?, ?)",
                    (user_id, data.name, data.username),
                )
            except sqlite3.IntegrityError as e:
                # Another request registered the same username in between.
                conn.rollback()
                logger.info("Username %s registered concurrently", data.username)
                raise ConflictError(USER_EXISTS) from e
            conn.commit()
            logger.info("Registered user %s (%s)", data.username, user_id)
            return UserRead(id=user_id, name=data.name, username=data.username, series=[])
        finally:
            conn.close()

    @classmethod
    async def get_by_username(cls, username: Optional[str]) -> UserRead:
        """Return the user with exactly this username.

        The comparison is case sensitive.  The returned user carries an
        empty ``series`` list; use ``SeriesService.list_series`` for the
        series.  Raises ``NotFoundError`` when ``username`` is empty or
        unknown.
        """
        if not username:
            raise NotFoundError(USER_NOT_FOUND)
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, name, username FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            logging.getLogger(__name__).info("User %s not found", username)
            raise NotFoundError(USER_NOT_FOUND)
        return UserRead(id=row["id"], name=row["name"], username=row["username"])

    @classmethod
    async def update_name(cls, user: UserRead, name: Optional[str]) -> UserRead:
        """Replace the user's name with ``name`` and return the updated user with its series."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET name = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (name, user.id),
            )
            conn.commit()
            series = SeriesService.load_series(cursor, user.id)
        finally:
            conn.close()
        logger.info("Renamed user %s", user.username)
        return user.model_copy(update={"name": name, "series": series})

    @staticmethod
    def _username_taken(cursor: sqlite3.Cursor, username: str) -> bool:
        row = cursor.execute(
            "SELECT id FROM users WHERE username = ?",
            (username,),
        ).fetchone()
        return row is not None
