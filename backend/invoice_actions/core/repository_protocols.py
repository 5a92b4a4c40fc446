"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - RecordStore.execute is async (one network round trip); ViewHost.invalidate is sync
      (in-process cache drop)
"""

from typing import Protocol

from invoice_actions.core.invoice_mutations import WriteStatement


class RecordStore(Protocol):
    """Contract for invoice persistence — implemented by shell.

    Returns the number of rows affected. Raises DatabaseError on any store failure.
    """
    async def execute(
        self, statement: WriteStatement, parameters: dict[str, object],
    ) -> int: ...


class ViewHost(Protocol):
    """Contract for read-cache invalidation — implemented by shell."""
    def invalidate(self, path: str) -> None: ...
