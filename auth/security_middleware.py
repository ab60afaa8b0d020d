"""Session cookie guard for everything outside the sign-in routes."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from api.middleware import request_id
from auth.exceptions import SessionExpiredError
from auth.session import SessionManager

PUBLIC_PATHS = ("/auth/login", "/auth/logout", "/health", "/docs", "/openapi.json")


def is_public(path: str) -> bool:
    """Exact public paths and anything below them; ``/auth/loginx`` is not public."""
    return any(path == p or path.startswith(f"{p}/") for p in PUBLIC_PATHS)


def _unauthorized(request: Request, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content=error_response(code, message, request_id(request)).model_dump(mode="json"),
    )


class AuthMiddleware(BaseHTTPMiddleware):
    """Rejects requests without a live session with 401.

    On success the session and its user id are on ``request.state``.
    """

    def __init__(self, app, session_manager: SessionManager):
        super().__init__(app)
        self._session_manager = session_manager

    async def dispatch(self, request: Request, call_next):
        if is_public(request.url.path):
            return await call_next(request)

        token = request.cookies.get("session_token")
        if not token:
            return _unauthorized(request, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

        try:
            session = self._session_manager.validate_session(token)
        except SessionExpiredError:
            return _unauthorized(request, ErrorCodes.SESSION_EXPIRED, "Session has expired")

        request.state.session = session
        request.state.user_id = session.user_id
        return await call_next(request)
