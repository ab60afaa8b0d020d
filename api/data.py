"""GET /api/data/invoices - read side of the invoice listing view.

The listing is read through the view cache. Invoice actions invalidate it,
so the first read after a mutation goes to the database.
"""

import logging

from fastapi import APIRouter, Request

from api.base import success_response
from api.middleware import request_id
from core.view_cache import ViewCache, INVOICES_VIEW

logger = logging.getLogger(__name__)

LISTING_LIMIT = 50


def create_data_router(services: dict, view_cache: ViewCache) -> APIRouter:
    router = APIRouter()

    invoice_svc = services["invoice"]

    @router.get("/data/invoices")
    async def list_invoices(request: Request):
        data = view_cache.get(INVOICES_VIEW)
        if data is None:
            logger.debug("View %s stale, reloading", INVOICES_VIEW)
            data = [i.model_dump(mode="json") for i in invoice_svc.list(LISTING_LIMIT)]
            view_cache.set(INVOICES_VIEW, data)
        return success_response(data, request_id(request)).model_dump(mode="json")

    @router.get("/data/invoices/{invoice_id}")
    async def get_invoice(request: Request, invoice_id: str):
        invoice = invoice_svc.get(invoice_id)
        if invoice is None:
            raise ValueError(f"Invoice {invoice_id} not found")
        return success_response(
            invoice.model_dump(mode="json"), request_id(request)
        ).model_dump(mode="json")

    return router
