"""Invoice Routes — the dashboard list view and the create/edit/delete form actions.

Invariants:
    - Form bodies are read raw and handed to the form actions untouched (fail-soft
      validation happens in core, not in FastAPI)
    - Redirect outcome → 303 See Other to the list view
    - Failed form state → 400 when it carries field errors, 503 when it is a store failure
    - Mounted at settings.invoices_path; the list view is cached under that same path,
      so the redirect target, the cache key and the URLs can never disagree
    - Unknown invoice on the edit form → ResourceNotFoundError (404 form state)

Design Decisions:
    - request.form() over Form(...) parameters: a missing field must reach the validator
      as missing, not be rejected by FastAPI before every error can be collected
    - 303 over 302/307: the browser follows a POST with a GET of the list
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_actions.api.error_handlers import form_state_response
from invoice_actions.config import Settings
from invoice_actions.core.domain_types import InvoiceId, InvoiceStatus
from invoice_actions.core.errors import ErrorContext, ResourceNotFoundError
from invoice_actions.core.invoice_mutations import DELETED_MESSAGE, Redirect
from invoice_actions.infrastructure.database import (
    DatabaseSessionManager, get_db, get_db_manager,
)
from invoice_actions.infrastructure.invoice_store import SqlRecordStore
from invoice_actions.infrastructure.view_cache import ListViewCache, get_view_cache
from invoice_actions.schemas.invoice import InvoiceEditForm, InvoiceListItem
from invoice_actions.services.form_actions import InvoiceFormActions
from invoice_actions.services.invoice_actions import InvoiceActions
from invoice_actions.services.invoice_queries import get_invoice_form, list_invoices

logger = logging.getLogger(__name__)
# Mounted at settings.invoices_path by create_app()
router = APIRouter(tags=["invoices"])


def app_settings(request: Request) -> Settings:
    """The settings the running app was built with (see create_app)."""
    return request.app.state.settings


def get_form_actions(
    manager: DatabaseSessionManager = Depends(get_db_manager),
    cache: ListViewCache = Depends(get_view_cache),
    settings: Settings = Depends(app_settings),
) -> InvoiceFormActions:
    """Build the action pipeline per request. Nothing survives between calls."""
    return InvoiceFormActions(
        InvoiceActions(
            SqlRecordStore(manager), cache,
            invoices_path=settings.invoices_path,
        ),
    )


def _form_state_response(state: dict) -> JSONResponse:
    code = (
        status.HTTP_400_BAD_REQUEST if "errors" in state
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return form_state_response(code, state)


@router.get("", response_model=list[InvoiceListItem])
async def invoices_view(
    status_filter: InvoiceStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    cache: ListViewCache = Depends(get_view_cache),
    settings: Settings = Depends(app_settings),
):
    """The invoices list. Cached until the next successful action invalidates it."""
    status_value = status_filter.value if status_filter else None
    return await cache.get_or_load(
        settings.invoices_path,
        lambda: list_invoices(db, status_value),
        variant=status_value,
    )


@router.post("/create")
async def create_invoice(
    request: Request,
    actions: InvoiceFormActions = Depends(get_form_actions),
):
    """Create an invoice from the submitted form."""
    form_data = await request.form()
    result = await actions.create_invoice(None, form_data)
    if isinstance(result, Redirect):
        return RedirectResponse(result.path, status_code=status.HTTP_303_SEE_OTHER)
    return _form_state_response(result)


@router.get("/{invoice_id}/edit", response_model=InvoiceEditForm)
async def edit_invoice_form(
    invoice_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Current values for the edit form."""
    values = await get_invoice_form(db, invoice_id)
    if not values:
        raise ResourceNotFoundError(
            "Invoice", str(invoice_id),
            ErrorContext(invoice_id=str(invoice_id), operation="edit_form"),
        )
    return values


@router.post("/{invoice_id}/edit")
async def update_invoice(
    invoice_id: UUID,
    request: Request,
    actions: InvoiceFormActions = Depends(get_form_actions),
):
    """Rewrite an invoice's customer, amount, and status from the submitted form."""
    form_data = await request.form()
    result = await actions.update_invoice(InvoiceId(invoice_id), None, form_data)
    if isinstance(result, Redirect):
        return RedirectResponse(result.path, status_code=status.HTTP_303_SEE_OTHER)
    return _form_state_response(result)


@router.post("/{invoice_id}/delete")
async def delete_invoice(
    invoice_id: UUID,
    actions: InvoiceFormActions = Depends(get_form_actions),
):
    """Delete an invoice. The list view refetches; no redirect."""
    state = await actions.delete_invoice(InvoiceId(invoice_id))
    if state is not None:
        return _form_state_response(state)
    return {"message": DELETED_MESSAGE}
