"""Customer ORM — the party an invoice is billed to.

Invariants:
    - id is a string key (forms submit it verbatim as customerId)
    - Customers are read-only from the invoice actions' point of view

Design Decisions:
    - String primary key over UUID: seeded customers come with stable external ids
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoice_actions.db.base import Base


class Customer(Base):
    """Customer — referenced by invoices, selected on the invoice form."""
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice", back_populates="customer",
    )
