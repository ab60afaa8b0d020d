"""Database operations for authentication.

Uses the users table, read during sign-in before any session exists.
"""

from uuid import UUID

from clients.postgres_client import PostgresClient
from auth.types import User, UserCredentials
from utils.timezone import now_utc

_USER_COLUMNS = "id, email, is_active, last_login_at"


def _user_from_row(row: dict) -> User:
    return User.model_validate(row)


class AuthDatabase:
    """Database operations for authentication."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Find user and password hash by email (case-insensitive)."""
        row = self._db.execute_single(
            f"""SELECT {_USER_COLUMNS}, password_hash
                FROM users WHERE email = lower(%s)""",
            (email,),
        )
        if row is None:
            return None
        return UserCredentials(user=_user_from_row(row), password_hash=row["password_hash"])

    def create_user(self, email: str, password_hash: str) -> User:
        """Create new user with email (lowercased) and a pre-hashed password."""
        rows = self._db.execute_returning(
            f"""INSERT INTO users (email, password_hash)
                VALUES (lower(%s), %s)
                RETURNING {_USER_COLUMNS}""",
            (email, password_hash),
        )
        return _user_from_row(rows[0])

    def update_last_login(self, user_id: UUID) -> None:
        """Stamp a successful sign-in."""
        self._db.execute(
            "UPDATE users SET last_login_at = %s WHERE id = %s",
            (now_utc(), str(user_id)),
        )
