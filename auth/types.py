"""Records passed around by the sign-in backend."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints


class User(BaseModel):
    """Account that can sign in, as read from the users table."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    is_active: bool = True
    last_login_at: datetime | None = None


class UserCredentials(BaseModel):
    """A user and the password hash to check a sign-in against."""

    user: User
    password_hash: str = Field(repr=False)


class Session(BaseModel):
    """Signed-in session. ``token`` is the value of the session cookie."""

    token: str
    user_id: UUID
    expires_at: datetime


class CredentialsForm(BaseModel):
    """The login form's fields, once they look like credentials."""

    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=6)]
