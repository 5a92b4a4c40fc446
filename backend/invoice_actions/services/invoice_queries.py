"""Invoice Queries — read side for the list view, the edit form, and customer options.

Invariants:
    - Read-only: no query here commits
    - List rows are ordered newest date first, then by id for a stable order

Design Decisions:
    - Plain dicts out, Pydantic schemas applied at the route: the list payload is what the
      view cache stores
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_actions.core.domain_types import InvoiceField
from invoice_actions.core.invoice_schema import from_cents
from invoice_actions.models.customer import Customer
from invoice_actions.models.invoice import Invoice


async def list_invoices(db: AsyncSession, status: str | None = None) -> list[dict]:
    """Invoices joined with their customer, optionally filtered by status."""
    query = (
        select(Invoice, Customer)
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc(), Invoice.id)
    )
    if status:
        query = query.where(Invoice.status == status)
    result = await db.execute(query)
    return [
        {
            "id": invoice.id,
            "customer_id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "image_url": customer.image_url,
            "amount": invoice.amount,
            "amount_display": f"${from_cents(invoice.amount):,}",
            "status": invoice.status,
            "date": invoice.date,
        }
        for invoice, customer in result.all()
    ]


async def get_invoice_form(db: AsyncSession, invoice_id: UUID) -> dict | None:
    """Current invoice values keyed by form field name, or None if missing."""
    result = await db.execute(select(Invoice).where(Invoice.id == invoice_id))
    invoice = result.scalar_one_or_none()
    if not invoice:
        return None
    return {
        "id": invoice.id,
        InvoiceField.CUSTOMER_ID.value: invoice.customer_id,
        InvoiceField.AMOUNT.value: str(from_cents(invoice.amount)),
        InvoiceField.STATUS.value: invoice.status,
    }


async def list_customers(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Customer).order_by(Customer.name))
    return [
        {"id": customer.id, "name": customer.name}
        for customer in result.scalars().all()
    ]
