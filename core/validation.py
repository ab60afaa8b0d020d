"""
Declarative validation for submitted invoice forms.

Each form field carries its rule as an annotated validator on a pydantic
schema. Pydantic validates every field even after one has failed, so a single
pass reports every problem at once. Field names are the submitted form names
(``customerId``, ``amount``, ``status``), which is also how errors are keyed.

Create and update share one schema: ``id`` and ``date`` are never part of a
submitted form.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Mapping

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError

from core.models import InvoiceForm, InvoiceStatus, MAX_AMOUNT, to_cents

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter a number greater than $0"
STATUS_MESSAGE = "Please select an invoice status."

FORM_FIELDS = ("customerId", "amount", "status")


def _customer_reference(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise PydanticCustomError("customer_required", CUSTOMER_MESSAGE)
    return value


def _positive_amount(value: Any) -> Decimal:
    """Coerce like a form number: blank or missing is zero, junk is rejected."""
    if value is None or isinstance(value, bool):
        raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
    # Compared before to_cents, which can't quantize past the context precision
    if not amount.is_finite() or amount <= 0 or amount > MAX_AMOUNT:
        raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
    # Sub-cent amounts would be stored as zero cents
    if to_cents(amount) < 1:
        raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
    return amount


def _enumerated_status(value: Any) -> str:
    if not isinstance(value, str) or value not in {s.value for s in InvoiceStatus}:
        raise PydanticCustomError("status_invalid", STATUS_MESSAGE)
    return value


class InvoiceFormSchema(BaseModel):
    """Rules for the user-editable invoice fields."""

    model_config = ConfigDict(populate_by_name=True)

    customer_id: Annotated[str, BeforeValidator(_customer_reference)] = Field(alias="customerId")
    amount: Annotated[Decimal, BeforeValidator(_positive_amount)]
    status: Annotated[InvoiceStatus, BeforeValidator(_enumerated_status)]

    def to_form(self) -> InvoiceForm:
        return InvoiceForm(
            customer_id=self.customer_id,
            amount=self.amount,
            status=self.status,
        )


FORM_SCHEMAS: dict[str, type[InvoiceFormSchema]] = {
    "create": InvoiceFormSchema,
    "update": InvoiceFormSchema,
}


@dataclass
class FormValidationResult:
    """Either sanitized ``data`` or field-keyed ``errors``, never both."""

    data: InvoiceForm | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.data is not None


def flatten_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field, keeping their order."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(name, []).append(error["msg"])
    return errors


def validate_invoice_form(kind: str, raw_fields: Mapping[str, Any]) -> FormValidationResult:
    """
    Validate a submitted invoice form.

    Args:
        kind: "create" or "update"
        raw_fields: Submitted form values, usually strings. Missing keys are
            treated as empty submissions.

    Returns:
        FormValidationResult with ``data`` on success, ``errors`` otherwise.
        Fields that passed are absent from ``errors``.

    Raises:
        ValueError: If ``kind`` is not a known form kind
    """
    schema = FORM_SCHEMAS.get(kind)
    if schema is None:
        raise ValueError(
            f"Unknown form kind '{kind}'. Valid kinds: {', '.join(sorted(FORM_SCHEMAS))}"
        )

    submitted = {name: raw_fields.get(name) for name in FORM_FIELDS}

    try:
        parsed = schema.model_validate(submitted)
    except ValidationError as e:
        return FormValidationResult(errors=flatten_errors(e))

    return FormValidationResult(data=parsed.to_form())
