"""Error Handlers — render every failed request as invoice form state.

Invariants:
    - Every error body is an InvoiceFormState: {message, errors?, code}, the same shape
      a failed create/update/delete returns, so one client branch handles them all
    - Request validation (malformed id, unknown status filter) → 400 with errors keyed
      by the offending parameter name
    - InvoiceActionsError → its http_status and public_message; store details stay in logs
    - Anything else → 500 with a fixed message

Design Decisions:
    - Keyed by parameter name (loc[-1]) rather than the full loc path: form errors are
      keyed by field name too, and each route has one parameter per name
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoice_actions.core.errors import InvoiceActionsError
from invoice_actions.schemas.invoice import InvoiceFormState

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."


def form_state_response(status_code: int, state: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=InvoiceFormState(**state).model_dump(exclude_none=True),
    )


def request_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by the name of the rejected parameter."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        name = str(error["loc"][-1]) if error["loc"] else "request"
        errors.setdefault(name, []).append(error["msg"])
    return errors


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvoiceActionsError)
    async def invoice_error_handler(request: Request, exc: InvoiceActionsError):
        logger.error(
            exc.message,
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "invoice_id": exc.context.invoice_id,
                "operation": exc.context.operation,
            },
        )
        return form_state_response(exc.http_status, exc.to_state())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        errors = request_errors(exc)
        logger.warning(
            "Rejected request to %s: %s", request.url.path, sorted(errors),
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return form_state_response(
            status.HTTP_400_BAD_REQUEST,
            {
                "message": INVALID_REQUEST_MESSAGE,
                "errors": errors,
                "code": "VALIDATION_ERROR",
            },
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception on %s", request.url.path,
            exc_info=exc, extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return form_state_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"message": UNEXPECTED_ERROR_MESSAGE, "code": "INTERNAL_ERROR"},
        )
