"""Series Tracker API client.

This module defines a small client wrapper around the Series Tracker
REST API.  The client uses the ``requests`` library internally and
exposes one method per API operation:

* :meth:`create_user` – register a new user.
* :meth:`update_user` – rename the current user.
* :meth:`create_series` – add a series with a number of episodes.
* :meth:`list_series` – list the current user's series.
* :meth:`mark_watched` – mark an episode of a series as watched.
* :meth:`get_progress` – fetch the watched percentage of a series.
* :meth:`health` – check that the service and its database respond.

The current user is identified by the ``username`` header, which the
client sends on every request once :attr:`username` is set.  All
methods return a tuple ``(data, error)``: ``error`` is ``None`` on
success, otherwise a dictionary with ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class SeriesTrackerAPI:
    """Client for interacting with the Series Tracker API."""

    def __init__(
        self,
        *,
        base_url: str,
        username: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``
                or ``http://localhost:8000/api/v1``.
            username: Username sent in the ``username`` header.  Required
                for every call except :meth:`create_user` and :meth:`health`.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None, expect_json: bool = True
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``PATCH``).
            path: Path relative to :attr:`base_url` (e.g. ``/series``).
            json_body: JSON body to send with the request.
            expect_json: Parse the body as JSON; otherwise return the text.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.username:
            headers["username"] = self.username
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if not expect_json:
                return response.text, None
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def create_user(self, name: str, username: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register a user and, on success, act as that user afterwards."""
        data, error = self._request("POST", "/users", json_body={"name": name, "username": username})
        if error:
            return None, error
        self.username = username
        return data, None

    def update_user(self, name: Optional[str]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Rename the current user."""
        return self._request("PUT", "/users", json_body={"name": name})

    # ------------------------------------------------------------------
    # Series operations
    # ------------------------------------------------------------------
    def create_series(self, name: str, qt_episodes: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a series with ``qt_episodes`` unwatched episodes."""
        return self._request("POST", "/series", json_body={"name": name, "qt_episodes": qt_episodes})

    def list_series(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Return the current user's series; an empty list on failure."""
        data, error = self._request("GET", "/series")
        if error:
            return [], error
        return data or [], None

    def mark_watched(self, series_id: str, ep_number: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Mark episode ``ep_number`` of a series as watched."""
        return self._request("PATCH", f"/series/{series_id}/watched", json_body={"ep_number": ep_number})

    def get_progress(self, series_id: str) -> Tuple[Optional[int], Optional[Error]]:
        """Return the watched percentage of a series as an integer."""
        text, error = self._request("GET", f"/series/{series_id}/progress", expect_json=False)
        if error:
            return None, error
        try:
            return int(text.strip()), None
        except ValueError:
            logger.error("Unexpected progress response: %r", text)
            return None, {"status_code": None, "message": f"Unexpected progress response: {text!r}"}

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Return the service health report."""
        return self._request("GET", "/health")
