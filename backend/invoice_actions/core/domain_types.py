"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId wraps UUID, CustomerId wraps the customer's string key
    - AmountCents is always a positive integer once persisted
    - Invoice status encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and bind to SQL without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", UUID)
CustomerId = NewType("CustomerId", str)


# ─── Value Types ─────────────────────────────────────────────────

AmountCents = NewType("AmountCents", int)   # > 0


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class InvoiceField(str, Enum):
    """Caller-facing form field names. Error mappings are keyed by these."""
    CUSTOMER_ID = "customerId"
    AMOUNT = "amount"
    STATUS = "status"


class MutationKind(str, Enum):
    """The three write operations. Used in messages and log records."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
