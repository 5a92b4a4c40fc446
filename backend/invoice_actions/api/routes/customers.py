"""Customer Routes — options for the invoice form's customer select.

Invariants:
    - Read-only; customers are never written by this service
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_actions.infrastructure.database import get_db
from invoice_actions.schemas.invoice import CustomerOption
from invoice_actions.services.invoice_queries import list_customers

router = APIRouter(prefix="/dashboard/customers", tags=["customers"])


@router.get("", response_model=list[CustomerOption])
async def customer_options(db: AsyncSession = Depends(get_db)):
    return await list_customers(db)
