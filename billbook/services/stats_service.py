"""Stats service — period statistics and the home summary."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from billbook.core.security import AuthUser
from billbook.services.bill_service import BillService
from billbook.services.stats import (
    Period,
    aggregate,
    compute_date_range,
    compute_totals,
    month_range,
    period_label,
)


class StatsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.bills = BillService(db)

    async def period_stats(self, user: AuthUser, period: Period, today: date) -> dict:
        """Category statistics for the period ending today."""
        date_range = compute_date_range(period, today)
        bills = await self.bills.list_bills(user, date_range.start, date_range.end)
        summary = aggregate(bills, period)
        return {
            "period": summary.period,
            "period_label": period_label(period, today),
            "date_from": date_range.start,
            "date_to": date_range.end,
            "total_income": summary.total_income,
            "total_expense": summary.total_expense,
            "net_balance": summary.net_balance,
            "expense_stats": summary.expense_stats,
            "income_stats": summary.income_stats,
        }

    async def home_summary(self, user: AuthUser, today: date, recent_limit: int) -> dict:
        """Totals for the current calendar month plus its latest bills."""
        date_range = month_range(today.year, today.month)
        bills = await self.bills.list_bills(user, date_range.start, date_range.end)
        total_income, total_expense = compute_totals(bills)
        recent = await self.bills.recent_bills(user, date_range.start, date_range.end, recent_limit)
        return {
            "date_from": date_range.start,
            "date_to": date_range.end,
            "total_income": total_income,
            "total_expense": total_expense,
            "net_balance": total_income - total_expense,
            "recent_bills": recent,
        }
