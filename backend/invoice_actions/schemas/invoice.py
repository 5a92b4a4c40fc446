"""Invoice Schemas — Pydantic response models for the invoice views and form state.

Invariants:
    - Form field names use the caller's spelling (customerId), list rows use column names
    - InvoiceFormState mirrors OperationFailed.to_state(): message always, errors optional;
      the global error handlers fill code as well
    - Amounts leave the API as cents (amount) plus a dollar string (amount_display)

Design Decisions:
    - Response schemas only: form input is validated by core/invoice_schema.py so every
      field error is reported at once (Pydantic would stop at the request boundary)
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from invoice_actions.core.domain_types import InvoiceStatus


class InvoiceFormState(BaseModel):
    """What the invoice form redisplays after a failed action or rejected request."""
    message: str
    errors: dict[str, list[str]] | None = None
    code: str | None = None


class InvoiceListItem(BaseModel):
    """One row of the invoices list view."""
    id: UUID
    customer_id: str
    name: str
    email: str
    image_url: str | None = None
    amount: int = Field(gt=0)
    amount_display: str
    status: InvoiceStatus
    date: date


class InvoiceEditForm(BaseModel):
    """Current values used to prefill the edit form."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    customer_id: str = Field(alias="customerId")
    amount: str
    status: InvoiceStatus


class CustomerOption(BaseModel):
    """A customer choice on the invoice form."""
    id: str
    name: str
