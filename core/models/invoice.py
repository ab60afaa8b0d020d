"""Invoice domain models.

Amounts are stored in cents (integer) to avoid floating point issues.
$10.00 = 1000 cents. Forms submit dollars; conversion happens once, at write.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from pydantic import BaseModel, field_validator


class InvoiceStatus(str, Enum):
    """Invoice status. Closed set: anything else is rejected at validation."""

    PENDING = "pending"
    PAID = "paid"


# invoices.amount is a Postgres integer column
MAX_AMOUNT_CENTS = 2_147_483_647
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS).scaleb(-2)


def to_cents(amount: Decimal) -> int:
    """Convert a dollar amount to integer cents, rounding half away from zero."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """Sanitized invoice fields, as produced by the form validator.

    ``amount`` is still in dollars here; see ``amount_cents``.
    """

    customer_id: str
    amount: Decimal
    status: InvoiceStatus

    @property
    def amount_cents(self) -> int:
        return to_cents(self.amount)


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: str
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: date

    model_config = {"from_attributes": True}

    @field_validator("id", "customer_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        # uuid columns may come back as UUID objects
        return str(value)

    @property
    def amount_dollars(self) -> float:
        """Amount in dollars for display."""
        return self.amount / 100

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID
