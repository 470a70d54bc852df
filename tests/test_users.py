"""Tests for user registration, renaming and the username guard."""

import sqlite3

from series_tracker_api.app.services.user_service import UserService


class TestCreateUser:
    def test_returns_created_user(self, client):
        response = client.post("/users", json={"name": "Alice", "username": "alice"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Alice"
        assert body["username"] == "alice"
        assert body["series"] == []
        assert body["id"]

    def test_ids_are_unique(self, client):
        first = client.post("/users", json={"name": "A", "username": "a"}).json()
        second = client.post("/users", json={"name": "B", "username": "b"}).json()

        assert first["id"] != second["id"]

    def test_duplicate_username_conflicts_without_second_record(self, client, alice, database):
        response = client.post("/users", json={"name": "Other Alice", "username": "alice"})

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"
        conn = sqlite3.connect(database)
        try:
            count = conn.execute("SELECT COUNT(*) FROM users WHERE username = 'alice'").fetchone()[0]
        finally:
            conn.close()
        assert count == 1

    def test_concurrent_duplicate_insert_conflicts(self, client, alice, database, monkeypatch):
        # The pre-insert check misses a user registered by another request.
        monkeypatch.setattr(UserService, "_username_taken", staticmethod(lambda cursor, username: False))

        response = client.post("/users", json={"name": "Other Alice", "username": "alice"})

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"
        conn = sqlite3.connect(database)
        try:
            rows = conn.execute("SELECT id, name FROM users WHERE username = 'alice'").fetchall()
        finally:
            conn.close()
        assert rows == [(alice["id"], "Alice")]

    def test_username_is_case_sensitive(self, client, alice):
        response = client.post("/users", json={"name": "Loud Alice", "username": "ALICE"})

        assert response.status_code == 201

    def test_versioned_prefix_behaves_the_same(self, client):
        response = client.post("/api/v1/users", json={"name": "Bob", "username": "bob"})

        assert response.status_code == 201
        assert client.get("/series", headers={"username": "bob"}).status_code == 200


class TestUpdateUser:
    def test_renames_and_returns_updated_user(self, client, alice, as_alice):
        response = client.put("/users", json={"name": "Alice Liddell"}, headers=as_alice)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Alice Liddell"
        assert body["id"] == alice["id"]
        assert body["username"] == "alice"

    def test_new_name_is_persisted(self, client, as_alice, database):
        client.put("/users", json={"name": "Alice Liddell"}, headers=as_alice)

        conn = sqlite3.connect(database)
        try:
            name = conn.execute("SELECT name FROM users WHERE username = 'alice'").fetchone()[0]
        finally:
            conn.close()
        assert name == "Alice Liddell"

    def test_absent_name_is_stored_as_given(self, client, as_alice):
        response = client.put("/users", json={}, headers=as_alice)

        assert response.status_code == 200
        assert response.json()["name"] is None

    def test_includes_existing_series(self, client, as_alice):
        client.post("/series", json={"name": "Show", "qt_episodes": 1}, headers=as_alice)

        response = client.put("/users", json={"name": "Alice"}, headers=as_alice)

        assert [s["name"] for s in response.json()["series"]] == ["Show"]


class TestUserGuard:
    def test_missing_header_is_not_found(self, client, alice):
        response = client.put("/users", json={"name": "Nobody"})

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found."

    def test_unknown_username_is_not_found(self, client, alice):
        response = client.get("/series", headers={"username": "bob"})

        assert response.status_code == 404

    def test_guard_compares_case_sensitively(self, client, alice):
        response = client.get("/series", headers={"username": "Alice"})

        assert response.status_code == 404

    def test_handler_does_not_run_for_unknown_user(self, client, alice, database):
        client.post("/series", json={"name": "Show", "qt_episodes": 2}, headers={"username": "ghost"})

        conn = sqlite3.connect(database)
        try:
            count = conn.execute("SELECT COUNT(*) FROM series").fetchone()[0]
        finally:
            conn.close()
        assert count == 0
