"""Sign-in settings."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """Where the login form dispatches to and how long its sessions last."""

    credentials_provider_id: str = Field(
        default="credentials",
        description="Provider key the login form dispatches to",
    )
    signed_in_redirect: str = Field(
        default="/dashboard",
        description="View to send users to after signing in",
    )
    session_ttl_hours: int = Field(
        default=24,
        description="Idle lifetime of a session; every authenticated request restarts it",
        ge=1,
        le=2160,
    )

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_hours * 3600
