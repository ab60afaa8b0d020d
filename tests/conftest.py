"""Shared test fixtures for the invoice actions test suite.

Nothing here talks to real infrastructure. Postgres is a ``Mock`` with the
PostgresClient spec; Valkey is a real ValkeyClient on top of an in-memory
stand-in for the redis-py connection.
"""

import time
from unittest.mock import Mock
from uuid import UUID

import pytest
import redis
from fastapi.testclient import TestClient

from auth.config import AuthConfig
from auth.session import SessionManager
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from core.models import ActionContext
from core.view_cache import ViewCache


# =============================================================================
# IN-MEMORY REDIS CONNECTION
# =============================================================================


class InMemoryRedis:
    """The subset of redis.Redis that ValkeyClient uses, with TTLs."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.expiry: dict[str, float] = {}

    def _live(self, key) -> bool:
        deadline = self.expiry.get(key)
        if deadline is not None and deadline <= time.monotonic():
            self.data.pop(key, None)
            self.expiry.pop(key, None)
        return key in self.data

    def get(self, key):
        return self.data.get(key) if self._live(key) else None

    def set(self, key, value, ex=None):
        self.data[key] = str(value)
        if ex is None:
            self.expiry.pop(key, None)
        else:
            self.expiry[key] = time.monotonic() + ex

    def expire(self, key, seconds):
        if not self._live(key):
            return 0
        self.expiry[key] = time.monotonic() + seconds
        return 1

    def delete(self, key):
        existed = self._live(key)
        self.data.pop(key, None)
        self.expiry.pop(key, None)
        return int(existed)

    def ttl(self, key):
        if not self._live(key):
            return -2
        if key not in self.expiry:
            return -1
        return max(int(self.expiry[key] - time.monotonic()), 0)

    def close(self):
        pass


@pytest.fixture
def redis_connection(monkeypatch) -> InMemoryRedis:
    """In-memory connection handed to ValkeyClient by redis.from_url."""
    connection = InMemoryRedis()
    monkeypatch.setattr(redis, "from_url", lambda url, **kwargs: connection)
    return connection


@pytest.fixture
def valkey(redis_connection) -> ValkeyClient:
    """ValkeyClient backed by the in-memory connection."""
    return ValkeyClient("redis://localhost:6379/0")


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def db():
    """PostgresClient mock. Configure return values or side effects per test."""
    mock = Mock(spec=PostgresClient)
    mock.execute.return_value = []
    mock.execute_single.return_value = None
    mock.execute_returning.return_value = [{"id": 1}]
    return mock


# =============================================================================
# ACTION FIXTURES
# =============================================================================


@pytest.fixture
def view_cache(valkey) -> ViewCache:
    return ViewCache(valkey, ttl_seconds=60)


@pytest.fixture
def context() -> ActionContext:
    """Context of a form submitted from the invoice create view."""
    return ActionContext(view_path="/dashboard/invoices/create", request_id="req-test")


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================

TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")


@pytest.fixture
def app_config() -> AuthConfig:
    return AuthConfig(session_ttl_hours=1)


@pytest.fixture
def app(db, valkey, app_config):
    """Full application over the mocked database and in-memory Valkey."""
    from main import create_app

    return create_app(db, valkey, app_config, view_cache_ttl_seconds=60)


@pytest.fixture
def session_token(valkey, app_config) -> str:
    """A live session stored in the app's Valkey."""
    return SessionManager(valkey, app_config).create_session(TEST_USER_ID).token


@pytest.fixture
def client(app, session_token):
    """Authenticated test client. Redirects are returned, not followed."""
    c = TestClient(app, raise_server_exceptions=False, follow_redirects=False)
    c.cookies.set("session_token", session_token)
    return c


@pytest.fixture
def unauthed_client(app):
    """Unauthenticated test client (no session cookie)."""
    return TestClient(app, raise_server_exceptions=False, follow_redirects=False)
