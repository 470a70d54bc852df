"""Shared fixtures: a fresh SQLite database and an API client per test."""

import pytest
from fastapi.testclient import TestClient

from series_tracker_api.app.core.config import settings
from series_tracker_api.app.core.db import init_db
from series_tracker_api.app.main import create_app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at an empty, migrated database file."""
    db_path = tmp_path / "series_tracker_test.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def client(database):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def alice(client):
    """Register ``alice`` and return the created user body."""
    response = client.post("/users", json={"name": "Alice", "username": "alice"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def as_alice(alice):
    return {"username": "alice"}
