"""Invoice Mutations — pure planning of the single write each action issues, and its outcomes.

Invariants:
    - plan_* functions are PURE: they return a StoreWrite or an OperationFailed, never touch IO
    - A failed validation never produces a StoreWrite (no store access on bad input)
    - Exactly one StoreWrite per action; date is bound only on insert
    - Outcomes are explicit values: the caller performs navigation on Redirect

Design Decisions:
    - Navigation as a returned Redirect over an abrupt unwind: the pipeline stays testable
      without a navigation host (the HTTP boundary turns it into a 303)
    - Statements named by WriteStatement, SQL owned by the store: core never imports sqlalchemy
    - The clock is a parameter (today), so create planning is deterministic under test
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum

from invoice_actions.core.domain_types import InvoiceId, MutationKind
from invoice_actions.core.invoice_schema import InvalidForm, validate_invoice_form


INVOICES_PATH = "/dashboard/invoices"

DELETED_MESSAGE = "Deleted Invoice."

MISSING_FIELDS_MESSAGES: dict[MutationKind, str] = {
    MutationKind.CREATE: "Missing Fields. Failed to Create Invoice.",
    MutationKind.UPDATE: "Missing Fields. Failed to Update Invoice.",
}

DATABASE_ERROR_MESSAGES: dict[MutationKind, str] = {
    MutationKind.CREATE: "Database Error: Failed to Create Invoice.",
    MutationKind.UPDATE: "Database Error: Failed to Update Invoice.",
    MutationKind.DELETE: "Database Error: Failed to Delete Invoice.",
}


class WriteStatement(str, Enum):
    """The parameterized statements the record store knows how to run."""
    INSERT_INVOICE = "insert_invoice"
    UPDATE_INVOICE = "update_invoice"
    DELETE_INVOICE = "delete_invoice"


@dataclass(frozen=True)
class StoreWrite:
    statement: WriteStatement
    parameters: dict[str, object]


# ─── Outcomes ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Redirect:
    """Write persisted and view invalidated. Caller navigates to path."""
    path: str


@dataclass(frozen=True)
class Revalidated:
    """Write persisted and view invalidated. No navigation."""
    path: str


@dataclass(frozen=True)
class OperationFailed:
    """Nothing was written. Carries what the form should redisplay."""
    message: str
    errors: dict[str, list[str]] | None = None

    def to_state(self) -> dict:
        state: dict = {"message": self.message}
        if self.errors is not None:
            state["errors"] = self.errors
        return state


MutationOutcome = Redirect | Revalidated | OperationFailed


# ─── Planning ────────────────────────────────────────────────────

def plan_create(
    raw: Mapping[str, object], today: date,
) -> StoreWrite | OperationFailed:
    """Validate a create form and plan the INSERT. id is left to the store."""
    result = validate_invoice_form(raw)
    if isinstance(result, InvalidForm):
        return OperationFailed(
            MISSING_FIELDS_MESSAGES[MutationKind.CREATE], result.errors,
        )
    form = result.form
    return StoreWrite(
        WriteStatement.INSERT_INVOICE,
        {
            "customer_id": form.customer_id,
            "amount": form.amount_cents,
            "status": form.status.value,
            "date": today,
        },
    )


def plan_update(
    invoice_id: InvoiceId, raw: Mapping[str, object],
) -> StoreWrite | OperationFailed:
    """Validate an update form and plan the full-row UPDATE. date is not rewritten."""
    result = validate_invoice_form(raw)
    if isinstance(result, InvalidForm):
        return OperationFailed(
            MISSING_FIELDS_MESSAGES[MutationKind.UPDATE], result.errors,
        )
    form = result.form
    return StoreWrite(
        WriteStatement.UPDATE_INVOICE,
        {
            "invoice_id": invoice_id,
            "customer_id": form.customer_id,
            "amount": form.amount_cents,
            "status": form.status.value,
        },
    )


def plan_delete(invoice_id: InvoiceId) -> StoreWrite:
    return StoreWrite(WriteStatement.DELETE_INVOICE, {"invoice_id": invoice_id})


def store_failure(kind: MutationKind) -> OperationFailed:
    """Opaque per-operation message. Store details stay in the server log."""
    return OperationFailed(DATABASE_ERROR_MESSAGES[kind])
