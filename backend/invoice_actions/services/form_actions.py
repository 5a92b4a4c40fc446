"""Form Actions — the caller-facing create/update/delete surface for the invoice form.

Invariants:
    - create_invoice / update_invoice accept the form's previous state and never read it
    - Returns Redirect on create/update success, None on delete success, otherwise the
      form state dict {"message": ..., "errors"?: {...}} to redisplay
    - Form data is read field by field: missing keys stay missing (no defaults injected)

Design Decisions:
    - previous_state lives only at this boundary: the pipeline (InvoiceActions) is a
      function of the form alone
    - Thin adapter over InvoiceActions: no validation or SQL here
"""

from collections.abc import Mapping

from invoice_actions.core.domain_types import InvoiceField, InvoiceId
from invoice_actions.core.invoice_mutations import OperationFailed, Redirect
from invoice_actions.services.invoice_actions import InvoiceActions


def read_invoice_form(form_data: Mapping[str, object]) -> dict[str, object]:
    """Project submitted form data onto the invoice fields. Extra fields are dropped."""
    return {
        name.value: form_data[name.value]
        for name in InvoiceField
        if name.value in form_data
    }


class InvoiceFormActions:
    """Server actions bound to one InvoiceActions pipeline."""

    def __init__(self, actions: InvoiceActions):
        self.actions = actions

    async def create_invoice(
        self, previous_state: dict | None, form_data: Mapping[str, object],
    ) -> Redirect | dict:
        outcome = await self.actions.create(read_invoice_form(form_data))
        if isinstance(outcome, OperationFailed):
            return outcome.to_state()
        return outcome

    async def update_invoice(
        self,
        invoice_id: InvoiceId,
        previous_state: dict | None,
        form_data: Mapping[str, object],
    ) -> Redirect | dict:
        outcome = await self.actions.update(
            invoice_id, read_invoice_form(form_data),
        )
        if isinstance(outcome, OperationFailed):
            return outcome.to_state()
        return outcome

    async def delete_invoice(self, invoice_id: InvoiceId) -> dict | None:
        outcome = await self.actions.delete(invoice_id)
        if isinstance(outcome, OperationFailed):
            return outcome.to_state()
        return None
