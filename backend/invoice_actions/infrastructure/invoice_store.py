"""SQL Record Store — runs the invoice write statements with bound parameters.

Invariants:
    - Every value reaches the database as a bound parameter (no string interpolation)
    - One statement, one transaction, one commit per execute() call
    - Store failures surface as DatabaseError (mapped by DatabaseSessionManager.session)

Design Decisions:
    - Core statements against the invoices Table, not ORM-enabled DML: no identity-map
      synchronization, Python-side column defaults (id) still applied on INSERT
    - UPDATE has no explicit values(): the SET clause is derived from the parameter keys
      that name columns, so invoice_id only ever appears in the WHERE clause
"""

import logging

from sqlalchemy import bindparam, delete, insert, update

from invoice_actions.core.errors import DatabaseError
from invoice_actions.core.invoice_mutations import WriteStatement
from invoice_actions.infrastructure.database import DatabaseSessionManager
from invoice_actions.models.invoice import Invoice

logger = logging.getLogger(__name__)

_invoices = Invoice.__table__

STATEMENTS = {
    WriteStatement.INSERT_INVOICE: insert(_invoices),
    WriteStatement.UPDATE_INVOICE: (
        update(_invoices).where(_invoices.c.id == bindparam("invoice_id"))
    ),
    WriteStatement.DELETE_INVOICE: (
        delete(_invoices).where(_invoices.c.id == bindparam("invoice_id"))
    ),
}


class SqlRecordStore:
    """RecordStore backed by the shared async session manager."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def execute(
        self, statement: WriteStatement, parameters: dict[str, object],
    ) -> int:
        """Run one write and commit. Returns rows affected."""
        try:
            async with self._manager.session() as db:
                result = await db.execute(STATEMENTS[statement], parameters)
                rows = result.rowcount
                await db.commit()
        except OSError as e:
            # driver could not reach the server before SQLAlchemy wrapped anything
            logger.error(f"DB connection error: {e}")
            raise DatabaseError("Connection failed", "connect") from e
        logger.debug("Executed %s (%d row(s))", statement.value, rows)
        return rows
