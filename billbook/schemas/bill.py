"""Bill schemas for request/response validation."""

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from billbook.services.categories import BillType, category_icon, category_label, is_valid_category


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


class BillCreate(BaseModel):
    type: BillType
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    category: str
    description: str | None = Field(default=None, max_length=500)
    date: datetime.date | None = None  # filled with the reference date by the route

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @model_validator(mode="after")
    def check_category(self) -> "BillCreate":
        if not is_valid_category(self.type, self.category):
            raise ValueError(f"Unknown {self.type.value} category: {self.category}")
        return self


class BillUpdate(BaseModel):
    type: BillType | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    category: str | None = None
    description: str | None = Field(default=None, max_length=500)
    date: datetime.date | None = None

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class BillResponse(BaseModel):
    id: uuid.UUID
    type: BillType
    amount: Decimal
    category: str
    description: str | None = None
    date: datetime.date
    created_at: datetime.datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def category_label(self) -> str:
        return category_label(self.category)

    @computed_field
    @property
    def category_icon(self) -> str:
        return category_icon(self.category)


class MonthlyBillsResponse(BaseModel):
    year: int
    month: int
    date_from: datetime.date
    date_to: datetime.date
    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    data: list[BillResponse]
