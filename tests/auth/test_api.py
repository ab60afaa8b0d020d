"""Tests for auth API routes."""

import psycopg2
import pytest


LOGIN_FORM = {"email": "user@nextmail.com", "password": "123456"}


@pytest.fixture
def user_row(test_user_id, password_hash):
    """users row as PostgresClient returns it."""
    return {
        "id": str(test_user_id),
        "email": "user@nextmail.com",
        "is_active": True,
        "last_login_at": None,
        "password_hash": password_hash,
    }


class TestLogin:
    """Test POST /auth/login endpoint."""

    def test_success_redirects_with_session_cookie(self, unauthed_client, db, user_row, valkey):
        db.execute_single.return_value = user_row

        response = unauthed_client.post("/auth/login", json={"data": LOGIN_FORM})

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("session_token=")
        assert "HttpOnly" in cookie

        token = cookie.split(";")[0].split("=", 1)[1]
        assert valkey.get_json(f"session:{token}")["user_id"] == user_row["id"]

    def test_session_cookie_opens_protected_routes(self, unauthed_client, db, user_row):
        db.execute_single.return_value = user_row
        response = unauthed_client.post("/auth/login", json={"data": LOGIN_FORM})
        token = response.headers["set-cookie"].split(";")[0].split("=", 1)[1]

        unauthed_client.cookies.set("session_token", token)
        db.execute_single.return_value = None
        db.execute.return_value = []

        assert unauthed_client.get("/api/data/invoices").status_code == 200

    def test_wrong_password_returns_invalid_credentials(self, unauthed_client, db, user_row):
        db.execute_single.return_value = user_row

        response = unauthed_client.post(
            "/auth/login", json={"data": {"email": "user@nextmail.com", "password": "wrong-one"}}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["error"]["code"] == "INVALID_CREDENTIALS"
        assert body["error"]["message"] == "Invalid Credentials"
        assert "set-cookie" not in response.headers

    def test_unknown_email_returns_invalid_credentials(self, unauthed_client):
        response = unauthed_client.post("/auth/login", json={"data": LOGIN_FORM})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid Credentials"

    def test_malformed_form_returns_invalid_credentials(self, unauthed_client, db):
        response = unauthed_client.post("/auth/login", json={"data": {"email": "not-an-email"}})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid Credentials"
        db.execute_single.assert_not_called()

    def test_previous_state_accepted(self, unauthed_client):
        response = unauthed_client.post(
            "/auth/login", json={"state": "Invalid Credentials", "data": LOGIN_FORM}
        )

        assert response.status_code == 401

    def test_inactive_user_returns_generic_message(self, unauthed_client, db, user_row):
        db.execute_single.return_value = {**user_row, "is_active": False}

        response = unauthed_client.post("/auth/login", json={"data": LOGIN_FORM})

        assert response.status_code == 401
        body = response.json()
        assert body["error"]["code"] == "SIGN_IN_FAILED"
        assert body["error"]["message"] == "Something went wrong."

    def test_database_failure_is_not_classified(self, unauthed_client, db):
        db.execute_single.side_effect = psycopg2.OperationalError("down")

        response = unauthed_client.post("/auth/login", json={"data": LOGIN_FORM})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


class TestLogout:
    """Test POST /auth/logout endpoint."""

    def test_revokes_session_and_clears_cookie(self, client, session_token, valkey):
        response = client.post("/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert valkey.get_json(f"session:{session_token}") is None
        assert "Max-Age=0" in response.headers["set-cookie"]

    def test_without_session_succeeds(self, unauthed_client):
        response = unauthed_client.post("/auth/logout")

        assert response.status_code == 200

    def test_meta_matches_header(self, client):
        response = client.post("/auth/logout")

        assert response.headers["X-Request-ID"] == response.json()["meta"]["request_id"]
