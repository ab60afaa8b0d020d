"""POST /api/actions - unified mutation endpoint.

Outcomes map onto HTTP like this:
- Redirect          -> 303 See Other to the target view
- ActionState with field errors -> 422 VALIDATION_ERROR, state in ``data``
- ActionState with message only -> 503 DATABASE_ERROR, state in ``data``
- None (delete)     -> 200 with empty data
Unrecoverable failures raise and are answered by api.errors.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse, RedirectResponse

from api.base import action_state_response, success_response, ErrorCodes
from api.middleware import action_context
from core.models import ActionContext, ActionState, Redirect
from core.services.invoice_service import InvoiceService


class ActionRequest(BaseModel):
    domain: str
    action: str
    id: str | None = None
    # Form state from the previous submission. Accepted for form round-trips, not read.
    state: ActionState | None = None
    data: dict = Field(default_factory=dict)


def create_actions_router(services: dict) -> APIRouter:
    router = APIRouter()

    handlers = {
        "invoice": InvoiceHandler(services["invoice"]),
    }

    @router.post("/actions")
    async def perform_action(request: Request, body: ActionRequest):
        handler = handlers.get(body.domain)
        if handler is None:
            raise ValueError(
                f"Unknown domain '{body.domain}'. "
                f"Valid domains: {', '.join(sorted(handlers.keys()))}"
            )

        if body.action not in handler.ALLOWED_ACTIONS:
            raise ValueError(
                f"Action '{body.action}' not allowed on '{body.domain}'. "
                f"Allowed: {', '.join(sorted(handler.ALLOWED_ACTIONS))}"
            )

        context = action_context(request)
        method = getattr(handler, f"_handle_{body.action}")
        outcome = method(body, context)
        return _to_response(outcome, context)

    return router


def _to_response(outcome: ActionState | Redirect | None, context: ActionContext):
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.target, status_code=303)

    if outcome is None:
        return success_response(None, context.request_id).model_dump(mode="json")

    if outcome.errors:
        status_code, code = 422, ErrorCodes.VALIDATION_ERROR
    else:
        status_code, code = 503, ErrorCodes.DATABASE_ERROR

    return JSONResponse(
        status_code=status_code,
        content=action_state_response(code, outcome, context.request_id).model_dump(mode="json"),
    )


# =============================================================================
# HANDLER CLASSES
# =============================================================================


def _require_id(body: ActionRequest) -> str:
    if not body.id:
        raise ValueError(f"'id' is required for {body.domain} {body.action}")
    return body.id


class InvoiceHandler:
    ALLOWED_ACTIONS = {"create", "update", "delete"}

    def __init__(self, service: InvoiceService):
        self.service = service

    def _handle_create(self, body: ActionRequest, context: ActionContext):
        return self.service.create(body.data, context)

    def _handle_update(self, body: ActionRequest, context: ActionContext):
        return self.service.update(_require_id(body), body.data, context)

    def _handle_delete(self, body: ActionRequest, context: ActionContext):
        return self.service.delete(_require_id(body), context)
