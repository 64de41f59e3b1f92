"""Bill API routes."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.api.deps import AuthUser, get_current_user, get_db, get_today
from billbook.schemas.bill import BillCreate, BillResponse, BillUpdate, MonthlyBillsResponse
from billbook.services.bill_service import BillService
from billbook.services.categories import BillType

router = APIRouter()


@router.get("", response_model=MonthlyBillsResponse)
async def list_bills(
    year: int | None = Query(None, ge=1970, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    type: BillType | None = None,
    category: str | None = None,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """List one month of bills with its income/expense totals.

    Defaults to the current month. Optional type/category filters narrow both
    the list and the totals.
    """
    service = BillService(db)
    return await service.monthly_bills(
        user=current_user,
        year=year or today.year,
        month=month or today.month,
        bill_type=type,
        category=category,
    )


@router.post("", response_model=BillResponse, status_code=201)
async def create_bill(
    data: BillCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """Record an income or expense; the date defaults to today."""
    if data.date is None:
        data = data.model_copy(update={"date": today})
    service = BillService(db)
    return await service.create_bill(data, current_user)


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(
    bill_id: uuid.UUID,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    service = BillService(db)
    return await service.get_bill(bill_id, current_user)


@router.patch("/{bill_id}", response_model=BillResponse)
async def update_bill(
    bill_id: uuid.UUID,
    data: BillUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    service = BillService(db)
    return await service.update_bill(bill_id, data, current_user)


@router.delete("/{bill_id}", status_code=204)
async def delete_bill(
    bill_id: uuid.UUID,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    service = BillService(db)
    await service.delete_bill(bill_id, current_user)
