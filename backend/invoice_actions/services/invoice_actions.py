"""Invoice Actions — the validated-mutation pipeline for create, update, and delete.

Invariants:
    - Follows impureim sandwich: pure plan (core) → one store write → invalidate → outcome
    - Validation failure returns before the store is touched
    - Store failure returns before the view is invalidated; detail is logged, never returned
    - Success always invalidates the list view; create/update then return Redirect,
      delete returns Revalidated
    - Zero rows affected on update/delete is logged, not reported as a failure

Design Decisions:
    - Navigation returned as a value (Redirect) instead of raised: callers decide how to
      transfer control, tests assert on the outcome directly
    - Invalidation failure after a committed write raises ViewInvalidationError rather
      than pretending the caller's view is fresh
    - Clock injected: "today" comes from the server (UTC), never from the form
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Callable

from invoice_actions.core.domain_types import InvoiceId, MutationKind
from invoice_actions.core.errors import (
    DatabaseError, ErrorContext, ViewInvalidationError,
)
from invoice_actions.core.invoice_mutations import (
    INVOICES_PATH,
    MutationOutcome,
    OperationFailed,
    Redirect,
    Revalidated,
    StoreWrite,
    plan_create,
    plan_delete,
    plan_update,
    store_failure,
)
from invoice_actions.core.repository_protocols import RecordStore, ViewHost

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class InvoiceActions:
    """Create, update, and delete one invoice per call."""

    def __init__(
        self,
        store: RecordStore,
        view_host: ViewHost,
        clock: Callable[[], date] = utc_today,
        invoices_path: str = INVOICES_PATH,
    ):
        self.store = store
        self.view_host = view_host
        self.clock = clock
        self.invoices_path = invoices_path

    async def create(self, raw: Mapping[str, object]) -> MutationOutcome:
        """Validate, INSERT, invalidate, redirect to the list."""
        # ── PURE: validate and plan ──
        planned = plan_create(raw, self.clock())
        if isinstance(planned, OperationFailed):
            return self._rejected(MutationKind.CREATE, planned)

        # ── IMPURE: write, then refresh the view ──
        failure = await self._persist(MutationKind.CREATE, planned)
        if failure:
            return failure
        self._invalidate(MutationKind.CREATE)
        return Redirect(self.invoices_path)

    async def update(
        self, invoice_id: InvoiceId, raw: Mapping[str, object],
    ) -> MutationOutcome:
        """Validate, rewrite customer/amount/status, invalidate, redirect."""
        planned = plan_update(invoice_id, raw)
        if isinstance(planned, OperationFailed):
            return self._rejected(MutationKind.UPDATE, planned, invoice_id)

        failure = await self._persist(MutationKind.UPDATE, planned, invoice_id)
        if failure:
            return failure
        self._invalidate(MutationKind.UPDATE, invoice_id)
        return Redirect(self.invoices_path)

    async def delete(self, invoice_id: InvoiceId) -> MutationOutcome:
        """DELETE by id and invalidate. No existence check, no redirect."""
        failure = await self._persist(
            MutationKind.DELETE, plan_delete(invoice_id), invoice_id,
        )
        if failure:
            return failure
        self._invalidate(MutationKind.DELETE, invoice_id)
        return Revalidated(self.invoices_path)

    # ─── Steps ───────────────────────────────────────────────────

    def _rejected(
        self,
        kind: MutationKind,
        failed: OperationFailed,
        invoice_id: InvoiceId | None = None,
    ) -> OperationFailed:
        logger.info(
            "Invoice %s rejected: invalid %s",
            kind.value, ", ".join(sorted(failed.errors or {})),
            extra={"operation": kind.value, "invoice_id": invoice_id},
        )
        return failed

    async def _persist(
        self,
        kind: MutationKind,
        write: StoreWrite,
        invoice_id: InvoiceId | None = None,
    ) -> OperationFailed | None:
        try:
            rows = await self.store.execute(write.statement, write.parameters)
        except DatabaseError as e:
            logger.error(
                "Failed to %s invoice: %s", kind.value, e.message,
                extra={
                    "operation": kind.value,
                    "invoice_id": invoice_id,
                    "error_code": e.code,
                },
            )
            return store_failure(kind)

        if rows == 0 and kind is not MutationKind.CREATE:
            logger.warning(
                "Invoice %s matched no rows", kind.value,
                extra={
                    "operation": kind.value,
                    "invoice_id": invoice_id,
                    "rows_affected": rows,
                },
            )
        return None

    def _invalidate(
        self, kind: MutationKind, invoice_id: InvoiceId | None = None,
    ) -> None:
        try:
            self.view_host.invalidate(self.invoices_path)
        except Exception as e:
            logger.error(
                "Invoice %s committed but view invalidation failed: %s",
                kind.value, e, exc_info=True,
                extra={"operation": kind.value, "path": self.invoices_path},
            )
            raise ViewInvalidationError(
                self.invoices_path,
                ErrorContext(
                    invoice_id=str(invoice_id) if invoice_id else None,
                    operation=kind.value,
                ),
            ) from e
