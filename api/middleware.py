"""Request-scoped middleware and context for API requests."""

import logging
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from core.models import ActionContext

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a unique request ID to every request and echoes it back."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        logger.debug("%s %s (request_id=%s)", request.method, request.url.path, request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def request_id(request: Request) -> str | None:
    """Id assigned by RequestIDMiddleware, echoed in the response meta."""
    return getattr(request.state, "request_id", None)


def action_context(request: Request, view_path: str | None = None) -> ActionContext:
    """Build the explicit context an action runs with from the HTTP request."""
    context = ActionContext(
        view_path=view_path or request.headers.get("X-View-Path", request.url.path),
        session_token=request.cookies.get("session_token"),
    )
    assigned = request_id(request)
    if assigned:
        context.request_id = assigned
    return context
