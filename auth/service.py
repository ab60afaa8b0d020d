"""Authentication service - the sign-in backend behind the login form."""

import logging
from typing import Any, Mapping, Protocol

from auth.database import AuthDatabase
from auth.exceptions import AuthError, UnknownProviderError
from auth.session import SessionManager
from auth.types import Session, User

logger = logging.getLogger(__name__)


class SignInProvider(Protocol):
    id: str

    def authorize(self, form_fields: Mapping[str, Any]) -> User: ...


class AuthService:
    """Dispatches sign-in to a provider by id and issues the session."""

    def __init__(
        self,
        auth_db: AuthDatabase,
        session_manager: SessionManager,
        providers: list[SignInProvider],
    ):
        self._auth_db = auth_db
        self._session_manager = session_manager
        self._providers = {provider.id: provider for provider in providers}

    def sign_in(self, provider_id: str, form_fields: Mapping[str, Any]) -> Session:
        """Exchange submitted credentials for a session.

        Raises:
            UnknownProviderError: If no provider is registered under provider_id.
            AuthError: Whatever the provider raised.
        """
        provider = self._providers.get(provider_id)
        if provider is None:
            raise UnknownProviderError(provider_id)

        try:
            user = provider.authorize(form_fields)
        except AuthError as e:
            logger.info("Sign-in via %s refused: %s", provider_id, e.type)
            raise

        session = self._session_manager.create_session(user.id)
        self._auth_db.update_last_login(user.id)
        logger.info("User %s signed in via %s", user.id, provider_id)
        return session

    def sign_out(self, session_token: str) -> None:
        self._session_manager.revoke_session(session_token)
