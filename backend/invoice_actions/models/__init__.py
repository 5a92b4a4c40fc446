"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Customer owns invoices; invoices.customer_id references customers.id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from invoice_actions.models.customer import Customer  # noqa: F401
from invoice_actions.models.invoice import Invoice  # noqa: F401
