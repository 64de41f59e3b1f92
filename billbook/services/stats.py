"""Bill statistics: period date ranges and category aggregation.

Everything here is a pure function over an already-fetched list of bills.
Bills are read by attribute (``type``, ``amount``, ``category``, ``date``),
so ORM rows and plain objects work alike.
"""

import calendar
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import NamedTuple

from billbook.services.categories import BillType

ZERO = Decimal("0")


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class DateRange(NamedTuple):
    """Inclusive calendar-date range."""

    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass
class CategoryStat:
    category: str
    amount: Decimal
    count: int
    percentage: float


@dataclass
class StatsSummary:
    period: Period
    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    expense_stats: list[CategoryStat] = field(default_factory=list)
    income_stats: list[CategoryStat] = field(default_factory=list)


def compute_date_range(period: Period | str, today: date) -> DateRange:
    """Return the range of ``period`` that ends on ``today``.

    Weeks start on Monday; a Sunday is the seventh day of its week, so its
    range starts six days earlier.
    """
    period = Period(period)
    if period is Period.WEEK:
        start = today - timedelta(days=today.weekday())
    elif period is Period.MONTH:
        start = today.replace(day=1)
    else:
        start = today.replace(month=1, day=1)
    return DateRange(start, today)


def month_range(year: int, month: int) -> DateRange:
    """Whole calendar month, first to last day."""
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(date(year, month, 1), date(year, month, last_day))


def period_label(period: Period | str, today: date) -> str:
    period = Period(period)
    if period is Period.WEEK:
        return "本周"
    if period is Period.MONTH:
        return f"{today.year}年{today.month}月"
    return f"{today.year}年"


def filter_by_range(bills: Iterable, date_range: DateRange) -> list:
    return [bill for bill in bills if bill.date in date_range]


def _amount(bill) -> Decimal:
    """Bill amount as a Decimal; missing or non-numeric values count as zero."""
    value = bill.amount
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            return ZERO
    return value if value.is_finite() else ZERO


def compute_totals(bills: Iterable) -> tuple[Decimal, Decimal]:
    """Return ``(total_income, total_expense)``."""
    income = expense = ZERO
    for bill in bills:
        if bill.type == BillType.INCOME:
            income += _amount(bill)
        elif bill.type == BillType.EXPENSE:
            expense += _amount(bill)
    return income, expense


def category_stats(bills: Iterable, total: Decimal) -> list[CategoryStat]:
    """Group bills by raw category and rank the groups by amount.

    Categories are not checked against the catalogue. Groups with equal
    amounts keep the order in which their category was first seen; that
    order is an artifact of the stable sort, not part of the contract.
    """
    groups: dict[str, list] = {}
    for bill in bills:
        group = groups.setdefault(bill.category, [ZERO, 0])
        group[0] += _amount(bill)
        group[1] += 1

    stats = [
        CategoryStat(
            category=category,
            amount=amount,
            count=count,
            percentage=float(amount / total * 100) if total > 0 else 0.0,
        )
        for category, (amount, count) in groups.items()
    ]
    stats.sort(key=lambda s: s.amount, reverse=True)
    return stats


def aggregate(bills: Sequence, period: Period | str) -> StatsSummary:
    """Summarize bills already restricted to ``period``'s date range."""
    expenses = [b for b in bills if b.type == BillType.EXPENSE]
    incomes = [b for b in bills if b.type == BillType.INCOME]

    total_income, total_expense = compute_totals(bills)

    return StatsSummary(
        period=Period(period),
        total_income=total_income,
        total_expense=total_expense,
        net_balance=total_income - total_expense,
        expense_stats=category_stats(expenses, total_expense),
        income_stats=category_stats(incomes, total_income),
    )
