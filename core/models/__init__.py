"""Core domain models."""

from core.models.invoice import Invoice, InvoiceForm, InvoiceStatus, MAX_AMOUNT, MAX_AMOUNT_CENTS, to_cents
from core.models.action_state import ActionState, Redirect
from core.models.context import ActionContext

__all__ = [
    # Invoice
    "Invoice", "InvoiceForm", "InvoiceStatus", "MAX_AMOUNT", "MAX_AMOUNT_CENTS", "to_cents",
    # Action outcomes
    "ActionState", "Redirect",
    # Context
    "ActionContext",
]
