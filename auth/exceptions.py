"""Typed exceptions for auth failures.

Every AuthError carries a ``type`` tag naming the failure. Callers that
report auth failures to users switch on the tag, never on the message.
"""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""

    type = "AuthError"


class InvalidCredentialsError(AuthError):
    """
    Submitted credentials don't match a user.

    Raised for unknown email, wrong password and malformed input alike,
    so callers can't tell which one it was.
    """

    type = "CredentialsSignin"


class AccessDeniedError(AuthError):
    """User account is deactivated. Sign-in not permitted."""

    type = "AccessDenied"


class UnknownProviderError(AuthError):
    """Sign-in requested for a provider that isn't configured."""

    type = "Configuration"

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(f"Unknown sign-in provider '{provider_id}'")


class SessionExpiredError(AuthError):
    """Session has expired or was revoked; user must sign in again."""

    type = "SessionExpired"
