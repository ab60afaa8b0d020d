"""Credential sign-in: login form dispatch, sign-in backend and sessions."""

from auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    AccessDeniedError,
    UnknownProviderError,
    SessionExpiredError,
)
from auth.types import User, UserCredentials, Session, CredentialsForm
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.passwords import hash_password, verify_password
from auth.session import SessionManager
from auth.providers import CredentialsProvider
from auth.service import AuthService
from auth.dispatcher import CredentialDispatcher, INVALID_CREDENTIALS, SOMETHING_WENT_WRONG
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router
