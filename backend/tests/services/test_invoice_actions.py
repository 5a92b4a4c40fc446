"""Invoice Actions — tests for the validate → persist → invalidate → navigate pipeline.

Tests cover:
    - Validation failure: form state returned, store and view untouched
    - Create success: one INSERT with server date, then invalidate and Redirect
    - Update success: one UPDATE keyed by id, then invalidate and Redirect
    - Delete success: one DELETE, invalidate, no Redirect
    - Store failure: opaque message, no invalidation, no navigation, no raise
    - Zero rows affected on update/delete is still success
    - Invalidation failure after a committed write raises ViewInvalidationError
"""

from uuid import uuid4

import pytest

from invoice_actions.core.errors import ViewInvalidationError
from invoice_actions.core.invoice_mutations import (
    OperationFailed, Redirect, Revalidated, WriteStatement,
)
from tests.services.fakes import TODAY, FakeRecordStore, FakeViewHost, make_actions

VALID = {"customerId": "c1", "amount": "125.00", "status": "paid"}


# ─── create ──────────────────────────────────────────────────────

async def test_create_persists_invalidates_and_redirects():
    store, view = FakeRecordStore(), FakeViewHost()
    outcome = await make_actions(store, view).create(VALID)

    assert outcome == Redirect("/dashboard/invoices")
    assert store.calls == [(
        WriteStatement.INSERT_INVOICE,
        {"customer_id": "c1", "amount": 12500, "status": "paid", "date": TODAY},
    )]
    assert view.invalidated == ["/dashboard/invoices"]


@pytest.mark.parametrize("customer_id", ["", None])
async def test_create_without_customer_never_touches_store(customer_id):
    store, view = FakeRecordStore(), FakeViewHost()
    raw = {**VALID, "customerId": customer_id}
    outcome = await make_actions(store, view).create(raw)

    assert isinstance(outcome, OperationFailed)
    assert outcome.message == "Missing Fields. Failed to Create Invoice."
    assert outcome.errors["customerId"] == ["Please select a customer."]
    assert store.calls == []
    assert view.invalidated == []


async def test_create_store_failure_returns_message_without_side_effects():
    store, view = FakeRecordStore(fail=True), FakeViewHost()
    outcome = await make_actions(store, view).create(VALID)

    assert outcome == OperationFailed("Database Error: Failed to Create Invoice.")
    assert outcome.to_state() == {"message": "Database Error: Failed to Create Invoice."}
    assert len(store.calls) == 1
    assert view.invalidated == []


async def test_create_store_failure_is_logged(caplog):
    with caplog.at_level("ERROR"):
        await make_actions(FakeRecordStore(fail=True)).create(VALID)
    assert "connection refused" in caplog.text


async def test_create_uses_clock_at_call_time():
    store = FakeRecordStore()
    days = iter([TODAY, TODAY.replace(day=19)])
    actions = make_actions(store)
    actions.clock = lambda: next(days)

    await actions.create(VALID)
    await actions.create(VALID)

    assert [params["date"] for _, params in store.calls] == [
        TODAY, TODAY.replace(day=19),
    ]


# ─── update ──────────────────────────────────────────────────────

async def test_update_rewrites_full_row_and_redirects():
    store, view = FakeRecordStore(), FakeViewHost()
    invoice_id = uuid4()
    outcome = await make_actions(store, view).update(
        invoice_id, {"customerId": "c2", "amount": "50", "status": "pending"},
    )

    assert outcome == Redirect("/dashboard/invoices")
    assert store.calls == [(
        WriteStatement.UPDATE_INVOICE,
        {"invoice_id": invoice_id, "customer_id": "c2", "amount": 5000, "status": "pending"},
    )]
    assert view.invalidated == ["/dashboard/invoices"]


async def test_update_with_empty_customer_returns_errors():
    store, view = FakeRecordStore(), FakeViewHost()
    outcome = await make_actions(store, view).update(
        "inv-1", {"customerId": "", "amount": "50", "status": "paid"},
    )

    assert outcome.to_state() == {
        "errors": {"customerId": ["Please select a customer."]},
        "message": "Missing Fields. Failed to Update Invoice.",
    }
    assert store.calls == []
    assert view.invalidated == []


async def test_update_store_failure():
    view = FakeViewHost()
    outcome = await make_actions(FakeRecordStore(fail=True), view).update(uuid4(), VALID)
    assert outcome == OperationFailed("Database Error: Failed to Update Invoice.")
    assert view.invalidated == []


async def test_update_missing_invoice_is_not_an_error(caplog):
    store, view = FakeRecordStore(rows=0), FakeViewHost()
    with caplog.at_level("WARNING"):
        outcome = await make_actions(store, view).update(uuid4(), VALID)
    assert outcome == Redirect("/dashboard/invoices")
    assert view.invalidated == ["/dashboard/invoices"]
    assert "matched no rows" in caplog.text


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_invalidates_without_redirect():
    store, view = FakeRecordStore(), FakeViewHost()
    invoice_id = uuid4()
    outcome = await make_actions(store, view).delete(invoice_id)

    assert outcome == Revalidated("/dashboard/invoices")
    assert store.calls == [
        (WriteStatement.DELETE_INVOICE, {"invoice_id": invoice_id}),
    ]
    assert view.invalidated == ["/dashboard/invoices"]


async def test_delete_twice_does_not_raise():
    store, view = FakeRecordStore(), FakeViewHost()
    actions = make_actions(store, view)
    invoice_id = uuid4()

    await actions.delete(invoice_id)
    store.rows = 0
    outcome = await actions.delete(invoice_id)

    assert outcome == Revalidated("/dashboard/invoices")
    assert len(store.calls) == 2
    assert view.invalidated == ["/dashboard/invoices"] * 2


async def test_delete_store_failure_returns_message():
    view = FakeViewHost()
    outcome = await make_actions(FakeRecordStore(fail=True), view).delete(uuid4())
    assert outcome == OperationFailed("Database Error: Failed to Delete Invoice.")
    assert view.invalidated == []


# ─── invalidation failure ────────────────────────────────────────

async def test_invalidation_failure_is_not_reported_as_success():
    store = FakeRecordStore()
    actions = make_actions(store, FakeViewHost(fail=True))
    with pytest.raises(ViewInvalidationError) as exc_info:
        await actions.create(VALID)
    assert len(store.calls) == 1
    assert exc_info.value.context.operation == "create"


async def test_custom_invoices_path_used_for_invalidate_and_redirect():
    store, view = FakeRecordStore(), FakeViewHost()
    actions = make_actions(store, view)
    actions.invoices_path = "/admin/invoices"

    outcome = await actions.create(VALID)

    assert outcome == Redirect("/admin/invoices")
    assert view.invalidated == ["/admin/invoices"]
