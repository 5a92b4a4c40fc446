"""Form Actions — tests for the caller-facing surface and previous-state handling.

Tests cover:
    - previous_state never changes the outcome
    - Failed actions come back as the form state dict
    - Extra form fields are dropped before validation
    - Delete returns None on success
"""

from uuid import uuid4

from invoice_actions.core.invoice_mutations import Redirect
from invoice_actions.services.form_actions import InvoiceFormActions, read_invoice_form
from tests.services.fakes import FakeRecordStore, FakeViewHost, make_actions

VALID = {"customerId": "c1", "amount": "12.50", "status": "pending"}


def test_read_invoice_form_keeps_only_invoice_fields():
    form = read_invoice_form({**VALID, "id": "x", "date": "2000-01-01", "csrf": "t"})
    assert form == VALID


def test_read_invoice_form_leaves_missing_fields_missing():
    assert read_invoice_form({"amount": "1"}) == {"amount": "1"}


async def test_create_invoice_redirects_regardless_of_previous_state():
    actions = InvoiceFormActions(make_actions())
    stale = {"message": "Missing Fields. Failed to Create Invoice.", "errors": {"amount": ["x"]}}

    assert await actions.create_invoice(None, VALID) == Redirect("/dashboard/invoices")
    assert await actions.create_invoice(stale, VALID) == Redirect("/dashboard/invoices")


async def test_create_invoice_returns_form_state_on_validation_failure():
    actions = InvoiceFormActions(make_actions())
    state = await actions.create_invoice({}, {"customerId": "c1", "amount": "0", "status": "paid"})
    assert state == {
        "message": "Missing Fields. Failed to Create Invoice.",
        "errors": {"amount": ["Please enter an amount greater than $0."]},
    }


async def test_update_invoice_returns_store_failure_state():
    actions = InvoiceFormActions(make_actions(FakeRecordStore(fail=True)))
    state = await actions.update_invoice(uuid4(), None, VALID)
    assert state == {"message": "Database Error: Failed to Update Invoice."}


async def test_delete_invoice_returns_none_on_success():
    view = FakeViewHost()
    actions = InvoiceFormActions(make_actions(view_host=view))
    assert await actions.delete_invoice(uuid4()) is None
    assert view.invalidated == ["/dashboard/invoices"]


async def test_delete_invoice_returns_state_on_failure():
    actions = InvoiceFormActions(make_actions(FakeRecordStore(fail=True)))
    assert await actions.delete_invoice(uuid4()) == {
        "message": "Database Error: Failed to Delete Invoice.",
    }
