"""Auth test fixtures."""

from unittest.mock import Mock
from uuid import UUID

import pytest

from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.passwords import hash_password
from auth.providers import CredentialsProvider
from auth.service import AuthService
from auth.session import SessionManager
from auth.types import User, UserCredentials

TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
TEST_EMAIL = "user@nextmail.com"
TEST_PASSWORD = "123456"


@pytest.fixture
def config():
    return AuthConfig(session_ttl_hours=1)


@pytest.fixture(scope="session")
def password_hash():
    """scrypt is deliberately slow; hash once per run."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def test_user():
    return User(id=TEST_USER_ID, email=TEST_EMAIL)


@pytest.fixture
def auth_db(test_user, password_hash):
    """AuthDatabase mock that knows one active user."""
    mock = Mock(spec=AuthDatabase)

    def lookup(email):
        if email.lower() == TEST_EMAIL:
            return UserCredentials(user=test_user, password_hash=password_hash)
        return None

    mock.get_credentials_by_email.side_effect = lookup
    return mock


@pytest.fixture
def session_manager(valkey, config):
    return SessionManager(valkey, config)


@pytest.fixture
def credentials_provider(auth_db):
    return CredentialsProvider(auth_db)


@pytest.fixture
def auth_service(auth_db, session_manager, credentials_provider):
    """AuthService with in-memory Valkey and mocked database."""
    return AuthService(
        auth_db=auth_db,
        session_manager=session_manager,
        providers=[credentials_provider],
    )


@pytest.fixture
def test_user_id():
    return TEST_USER_ID


@pytest.fixture
def test_password():
    return TEST_PASSWORD
