"""
Invoice actions: create, update and delete from submitted forms.

Each mutation is one best-effort statement against Postgres: no retries, no
multi-statement transactions, last write wins. Validation and database
failures on create/update come back as an ActionState for the form to render.
Delete is triggered from the listing itself and has no form to report to, so
its failures raise instead.

On success every mutation invalidates the invoice listing before anything
else happens. Create and update then redirect to it.
"""

import logging
from typing import Any, Mapping
from uuid import uuid4

import psycopg2

from clients.postgres_client import PostgresClient
from core.exceptions import ActionFailedError
from core.models import ActionContext, ActionState, Invoice, Redirect
from core.validation import validate_invoice_form
from core.view_cache import ViewCache, INVOICES_VIEW
from utils.timezone import today_utc

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice mutations and the listing reads they invalidate."""

    def __init__(self, postgres: PostgresClient, view_cache: ViewCache):
        self.postgres = postgres
        self.view_cache = view_cache

    def create(self, form_fields: Mapping[str, Any], context: ActionContext) -> ActionState | Redirect:
        """
        Create an invoice from a submitted form.

        The id and date are assigned here; the form never supplies them.

        Returns:
            Redirect to the listing on success, ActionState otherwise
        """
        result = validate_invoice_form("create", form_fields)
        if not result.success:
            return ActionState(
                errors=result.errors,
                message="Missing Fields. Failed to create invoice",
            )

        form = result.data
        invoice_id = uuid4()

        try:
            self.postgres.execute(
                """
                INSERT INTO invoices (id, customer_id, amount, status, date)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (invoice_id, form.customer_id, form.amount_cents, form.status.value, today_utc()),
            )
        except psycopg2.Error:
            logger.warning(
                "Failed to create invoice (request_id=%s)", context.request_id, exc_info=True
            )
            return ActionState(message="Database Error: Failed to create invoice.")

        logger.info("Created invoice %s (request_id=%s)", invoice_id, context.request_id)

        self.view_cache.invalidate(INVOICES_VIEW)
        return Redirect(INVOICES_VIEW)

    def update(
        self,
        invoice_id: str,
        form_fields: Mapping[str, Any],
        context: ActionContext,
    ) -> ActionState | Redirect:
        """
        Update customer, amount and status of an invoice.

        ``invoice_id`` comes from the route, not the form. id and date are
        never written. Updating an id that doesn't exist is not an error.
        """
        result = validate_invoice_form("update", form_fields)
        if not result.success:
            return ActionState(
                errors=result.errors,
                message="Missing Fields. Failed to update invoice",
            )

        form = result.data

        try:
            self.postgres.execute(
                """
                UPDATE invoices
                SET customer_id = %s, amount = %s, status = %s
                WHERE id = %s
                """,
                (form.customer_id, form.amount_cents, form.status.value, invoice_id),
            )
            self.view_cache.invalidate(INVOICES_VIEW)
        except psycopg2.Error:
            logger.warning(
                "Failed to update invoice %s (request_id=%s)",
                invoice_id,
                context.request_id,
                exc_info=True,
            )
            return ActionState(message="Database Error: Failed to update invoice.")

        logger.info("Updated invoice %s (request_id=%s)", invoice_id, context.request_id)

        return Redirect(INVOICES_VIEW)

    def delete(self, invoice_id: str, context: ActionContext) -> None:
        """
        Delete an invoice. Deleting an id that doesn't exist succeeds.

        Never redirects: the caller is already on the listing.

        Raises:
            ActionFailedError: If the database rejects the delete
        """
        try:
            self.postgres.execute("DELETE FROM invoices WHERE id = %s", (invoice_id,))
            self.view_cache.invalidate(INVOICES_VIEW)
        except psycopg2.Error as e:
            logger.error(
                "Error deleting invoice %s (request_id=%s): %s", invoice_id, context.request_id, e
            )
            raise ActionFailedError("Failed to delete invoice") from e

        logger.info("Deleted invoice %s (request_id=%s)", invoice_id, context.request_id)

    def get(self, invoice_id: str) -> Invoice | None:
        """Get invoice by ID."""
        row = self.postgres.execute_single(
            "SELECT id, customer_id, amount, status, date FROM invoices WHERE id = %s",
            (invoice_id,),
        )
        if row is None:
            return None
        return Invoice(**row)

    def list(self, limit: int = 50) -> list[Invoice]:
        """List invoices, newest first."""
        rows = self.postgres.execute(
            """
            SELECT id, customer_id, amount, status, date
            FROM invoices
            ORDER BY date DESC, id
            LIMIT %s
            """,
            (limit,),
        )
        return [Invoice(**row) for row in rows]
