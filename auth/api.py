"""HTTP routes for authentication."""

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse, RedirectResponse

from api.base import success_response, error_response, ErrorCodes
from api.middleware import action_context, request_id
from auth.config import AuthConfig
from auth.dispatcher import CredentialDispatcher, INVALID_CREDENTIALS
from auth.service import AuthService


class LoginRequest(BaseModel):
    """Login form submission."""

    # Message from the previous attempt. Accepted for form round-trips, not read.
    state: str | None = None
    data: dict = Field(default_factory=dict)


def create_auth_router(
    dispatcher: CredentialDispatcher,
    auth_service: AuthService,
    config: AuthConfig,
) -> APIRouter:
    """Create auth router with injected services."""
    router = APIRouter(tags=["auth"])

    @router.post("/login")
    async def login(request: Request, body: LoginRequest):
        """Sign in with the credentials provider.

        Redirects to the dashboard with a session cookie on success. On
        failure returns 401 with the user-facing classification as message.
        """
        context = action_context(request, view_path="/login")
        classification = dispatcher.authenticate(body.data, context)

        if classification is not None:
            code = (
                ErrorCodes.INVALID_CREDENTIALS
                if classification == INVALID_CREDENTIALS
                else ErrorCodes.SIGN_IN_FAILED
            )
            return JSONResponse(
                status_code=401,
                content=error_response(code, classification, context.request_id).model_dump(mode="json"),
            )

        response = RedirectResponse(config.signed_in_redirect, status_code=303)
        response.set_cookie(
            key="session_token",
            value=context.session_token,
            httponly=True,
            secure=True,
            samesite="lax",
            max_age=config.session_ttl_seconds,
        )
        return response

    @router.post("/logout")
    async def logout(request: Request, response: Response):
        """Logout - revoke session and clear cookie."""
        session_token = request.cookies.get("session_token")

        if session_token:
            auth_service.sign_out(session_token)

        response.delete_cookie(key="session_token")

        return success_response({"message": "Logged out successfully"}, request_id(request))

    return router
