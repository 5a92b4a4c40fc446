"""Invoice ORM — one billed amount for one customer.

Invariants:
    - id is UUID primary key, generated on insert (never caller-supplied)
    - amount is integer cents, always > 0 (CHECK constraint)
    - status is 'pending' or 'paid' (CHECK constraint)
    - date is set once on insert and never rewritten by updates

Design Decisions:
    - Integer cents over Numeric/Float: no binary floating-point drift in currency
    - CHECK constraints duplicate the form rules: a bad write fails in the store even
      if it bypasses the validators
"""

import datetime
import uuid

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from invoice_actions.db.base import Base


class Invoice(Base):
    """Invoice — created, fully rewritten, or deleted by the invoice actions."""
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customers.id"), nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="invoices", lazy="selectin",
    )
