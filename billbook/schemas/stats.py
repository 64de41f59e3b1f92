"""Statistics schemas."""

import datetime
from decimal import Decimal

from pydantic import BaseModel, computed_field

from billbook.schemas.bill import BillResponse
from billbook.services.categories import BillType, category_icon, category_label
from billbook.services.stats import Period


class CategoryStatResponse(BaseModel):
    category: str
    amount: Decimal
    count: int
    percentage: float

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def label(self) -> str:
        return category_label(self.category)

    @computed_field
    @property
    def icon(self) -> str:
        return category_icon(self.category)


class StatsResponse(BaseModel):
    period: Period
    period_label: str
    date_from: datetime.date
    date_to: datetime.date
    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    expense_stats: list[CategoryStatResponse]
    income_stats: list[CategoryStatResponse]


class HomeSummaryResponse(BaseModel):
    date_from: datetime.date
    date_to: datetime.date
    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    recent_bills: list[BillResponse]


class CategoryOption(BaseModel):
    value: str
    label: str
    icon: str


class CategoryListResponse(BaseModel):
    type: BillType
    categories: list[CategoryOption]
