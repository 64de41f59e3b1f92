"""Bill management service."""

import uuid
from datetime import date, datetime, timezone

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.core.exceptions import NotFoundError, ValidationError
from billbook.core.security import AuthUser
from billbook.models.bill import Bill
from billbook.schemas.bill import BillCreate, BillUpdate
from billbook.services.categories import BillType, is_valid_category
from billbook.services.stats import compute_totals, month_range

logger = structlog.get_logger()


class BillService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _owned(self, user: AuthUser):
        return select(Bill).where(
            Bill.user_id == user.id,
            Bill.deleted_at.is_(None),
        )

    async def list_bills(
        self,
        user: AuthUser,
        date_from: date | None = None,
        date_to: date | None = None,
        bill_type: BillType | None = None,
        category: str | None = None,
    ) -> list[Bill]:
        """List the user's bills, newest date first."""
        query = self._owned(user)
        if date_from:
            query = query.where(Bill.date >= date_from)
        if date_to:
            query = query.where(Bill.date <= date_to)
        if bill_type:
            query = query.where(Bill.type == bill_type.value)
        if category:
            query = query.where(Bill.category == category)

        query = query.order_by(Bill.date.desc(), Bill.created_at.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def monthly_bills(
        self,
        user: AuthUser,
        year: int,
        month: int,
        bill_type: BillType | None = None,
        category: str | None = None,
    ) -> dict:
        """Bills of one calendar month with income/expense totals."""
        date_range = month_range(year, month)
        bills = await self.list_bills(user, date_range.start, date_range.end, bill_type, category)
        total_income, total_expense = compute_totals(bills)
        return {
            "year": year,
            "month": month,
            "date_from": date_range.start,
            "date_to": date_range.end,
            "total_income": total_income,
            "total_expense": total_expense,
            "net_balance": total_income - total_expense,
            "data": bills,
        }

    async def recent_bills(
        self,
        user: AuthUser,
        date_from: date,
        date_to: date,
        limit: int,
    ) -> list[Bill]:
        """Most recently recorded bills within a date range."""
        query = (
            self._owned(user)
            .where(Bill.date >= date_from, Bill.date <= date_to)
            .order_by(Bill.created_at.desc())
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create_bill(self, data: BillCreate, user: AuthUser) -> Bill:
        bill = Bill(
            user_id=user.id,
            type=data.type.value,
            amount=data.amount,
            category=data.category,
            description=data.description,
            date=data.date,
        )
        self.db.add(bill)
        await self.db.flush()
        await self.db.refresh(bill)
        logger.info("Bill created", bill_id=str(bill.id), type=bill.type, category=bill.category)
        return bill

    async def get_bill(self, bill_id: uuid.UUID, user: AuthUser) -> Bill:
        """Fetch one of the user's bills.

        Bills owned by someone else are reported as missing.
        """
        result = await self.db.execute(self._owned(user).where(Bill.id == bill_id))
        bill = result.scalar_one_or_none()
        if not bill:
            raise NotFoundError("Bill")
        return bill

    async def update_bill(self, bill_id: uuid.UUID, data: BillUpdate, user: AuthUser) -> Bill:
        """Partially update a bill.

        Type and category are checked together after merging, so switching a
        bill from expense to income also requires an income category.
        """
        bill = await self.get_bill(bill_id, user)
        update_data = data.model_dump(exclude_unset=True)

        for key in ("type", "amount", "category", "date"):
            if key in update_data and update_data[key] is None:
                raise ValidationError(f"{key} cannot be null")
        if "type" in update_data:
            update_data["type"] = update_data["type"].value

        bill_type = update_data.get("type", bill.type)
        category = update_data.get("category", bill.category)
        if not is_valid_category(bill_type, category):
            raise ValidationError(f"Unknown {bill_type} category: {category}")

        for key, value in update_data.items():
            setattr(bill, key, value)
        await self.db.flush()
        await self.db.refresh(bill)
        return bill

    async def delete_bill(self, bill_id: uuid.UUID, user: AuthUser) -> None:
        """Soft-delete a bill."""
        bill = await self.get_bill(bill_id, user)
        bill.deleted_at = datetime.now(timezone.utc)
        await self.db.flush()
        logger.info("Bill deleted", bill_id=str(bill.id))
