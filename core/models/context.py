"""Explicit per-request context passed into every action."""

from dataclasses import dataclass, field
from uuid import uuid4


@dataclass
class ActionContext:
    """
    What an action needs to know about the request that invoked it.

    Built by the HTTP layer and passed down explicitly; nothing in core/ or
    auth/ reads request state from anywhere else.

    Attributes:
        view_path: Path of the view the action was submitted from
        session_token: Session cookie value, if any. Sign-in writes the new
            token here for the HTTP layer to hand back to the client.
        request_id: Correlation id for log lines
    """

    view_path: str = "/"
    session_token: str | None = None
    request_id: str = field(default_factory=lambda: str(uuid4()))
