"""Login form dispatch: forward credentials and classify the outcome.

The login form only ever sees two messages. Anything the sign-in backend
reports beyond "wrong credentials" collapses into a generic one, so backend
details never reach the user.
"""

from typing import Any, Mapping

from auth.exceptions import AuthError, InvalidCredentialsError
from auth.service import AuthService
from core.models import ActionContext

INVALID_CREDENTIALS = "Invalid Credentials"
SOMETHING_WENT_WRONG = "Something went wrong."


class CredentialDispatcher:
    """Sends login form submissions to one fixed sign-in provider."""

    def __init__(self, backend: AuthService, provider_id: str = "credentials"):
        self._backend = backend
        self._provider_id = provider_id

    def authenticate(self, form_fields: Mapping[str, Any], context: ActionContext) -> str | None:
        """
        Sign in with the submitted form fields.

        Returns:
            None on success, after writing the new session token into
            ``context``. Otherwise one of INVALID_CREDENTIALS or
            SOMETHING_WENT_WRONG.

        Exceptions that are not AuthErrors propagate unchanged.
        """
        try:
            session = self._backend.sign_in(self._provider_id, form_fields)
        except AuthError as e:
            if e.type == InvalidCredentialsError.type:
                return INVALID_CREDENTIALS
            return SOMETHING_WENT_WRONG

        context.session_token = session.token
        return None
