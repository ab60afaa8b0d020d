"""Sign-in providers.

A provider turns submitted form fields into a verified User or raises an
AuthError. Providers are registered with AuthService under their ``id``.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from auth.database import AuthDatabase
from auth.exceptions import AccessDeniedError, InvalidCredentialsError
from auth.passwords import verify_password
from auth.types import CredentialsForm, User


class CredentialsProvider:
    """Email and password sign-in against the users table."""

    def __init__(self, auth_db: AuthDatabase, provider_id: str = "credentials"):
        self.id = provider_id
        self._auth_db = auth_db

    def authorize(self, form_fields: Mapping[str, Any]) -> User:
        """Verify submitted email and password.

        Raises:
            InvalidCredentialsError: Malformed form, unknown email or wrong password.
            AccessDeniedError: Account is deactivated.
        """
        try:
            credentials = CredentialsForm.model_validate({
                "email": form_fields.get("email"),
                "password": form_fields.get("password"),
            })
        except ValidationError:
            raise InvalidCredentialsError("Invalid email or password")

        record = self._auth_db.get_credentials_by_email(credentials.email)
        if record is None or not verify_password(credentials.password, record.password_hash):
            raise InvalidCredentialsError("Invalid email or password")

        if not record.user.is_active:
            raise AccessDeniedError("Account is deactivated")

        return record.user
