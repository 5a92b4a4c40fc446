"""Invoice Form Schema — field validators that coerce raw form text into a typed invoice.

Invariants:
    - validate_invoice_form is PURE and fail-soft: every field is checked, every
      violated field contributes its own message list
    - id and date are never read from the form (both are omitted from the input projection)
    - A ValidForm always carries amount_cents > 0 and a status from InvoiceStatus
    - Error mappings are keyed by InvoiceField values (the caller's form field names)

Design Decisions:
    - Explicit per-field validators composed by hand over a reflective schema object:
      each rule is readable in isolation and testable without the others
    - Decimal over float for amounts: "12.50" becomes exactly 1250 cents
    - Half-up rounding to the cent: deterministic for inputs like "0.005"
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from invoice_actions.core.domain_types import (
    AmountCents, CustomerId, InvoiceField, InvoiceStatus,
)


CUSTOMER_REQUIRED = "Please select a customer."
AMOUNT_NOT_POSITIVE = "Please enter an amount greater than $0."
AMOUNT_NOT_NUMERIC = "Please enter a valid amount."
STATUS_INVALID = "Please select an invoice status."

# Locale-naive: ASCII digits, optional "." fraction and exponent. No grouping separators.
_DECIMAL_PATTERN = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")
_CENT = Decimal("0.01")


# ─── Results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class InvoiceForm:
    """The mutable fields of an invoice after coercion."""
    customer_id: CustomerId
    amount: Decimal
    status: InvoiceStatus

    @property
    def amount_cents(self) -> AmountCents:
        return to_cents(self.amount)


@dataclass(frozen=True)
class ValidForm:
    form: InvoiceForm


@dataclass(frozen=True)
class InvalidForm:
    errors: dict[str, list[str]]


# ─── Field validators ────────────────────────────────────────────

def to_cents(amount: Decimal) -> AmountCents:
    """Dollars to integer cents, rounding half-up at the cent."""
    return AmountCents(int(amount.quantize(_CENT, rounding=ROUND_HALF_UP) * 100))


def from_cents(cents: int) -> Decimal:
    """Stored cents back to dollars, e.g. for prefilling the edit form."""
    return (Decimal(cents) / 100).quantize(_CENT)


def validate_customer_id(raw: object) -> tuple[CustomerId | None, list[str]]:
    if not isinstance(raw, str) or not raw.strip():
        return None, [CUSTOMER_REQUIRED]
    return CustomerId(raw.strip()), []


def coerce_amount(raw: object) -> tuple[Decimal | None, list[str]]:
    """Parse a dollar amount. Missing or blank input coerces to zero."""
    if raw is None:
        raw = ""
    if not isinstance(raw, str):
        return None, [AMOUNT_NOT_NUMERIC]
    text = raw.strip()
    if not text:
        return None, [AMOUNT_NOT_POSITIVE]
    if not _DECIMAL_PATTERN.match(text):
        return None, [AMOUNT_NOT_NUMERIC]
    try:
        amount = Decimal(text)
        cents = to_cents(amount)
    except InvalidOperation:
        # exponent too large to quantize to the cent
        return None, [AMOUNT_NOT_NUMERIC]
    # "0.004" is positive but stores as zero cents
    if amount <= 0 or cents <= 0:
        return None, [AMOUNT_NOT_POSITIVE]
    return amount, []


def validate_status(raw: object) -> tuple[InvoiceStatus | None, list[str]]:
    if not isinstance(raw, str):
        return None, [STATUS_INVALID]
    try:
        return InvoiceStatus(raw), []
    except ValueError:
        return None, [STATUS_INVALID]


# ─── Schema ──────────────────────────────────────────────────────

def validate_invoice_form(raw: Mapping[str, object]) -> ValidForm | InvalidForm:
    """Validate the create/update projection of an invoice form. Pure."""
    customer_id, customer_errors = validate_customer_id(
        raw.get(InvoiceField.CUSTOMER_ID.value),
    )
    amount, amount_errors = coerce_amount(raw.get(InvoiceField.AMOUNT.value))
    status, status_errors = validate_status(raw.get(InvoiceField.STATUS.value))

    errors = {
        name.value: messages
        for name, messages in (
            (InvoiceField.CUSTOMER_ID, customer_errors),
            (InvoiceField.AMOUNT, amount_errors),
            (InvoiceField.STATUS, status_errors),
        )
        if messages
    }
    if errors:
        return InvalidForm(errors=errors)
    return ValidForm(
        form=InvoiceForm(customer_id=customer_id, amount=amount, status=status),
    )
