"""Bill types and the fixed category catalogue.

Expense and income bills draw their category from two distinct enumerated
sets. Each key carries display data (label and icon) in a static lookup
table; keys missing from the table are displayed under their raw value.
"""

from enum import Enum
from typing import NamedTuple


class BillType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class ExpenseCategory(str, Enum):
    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    HOUSING = "housing"
    MEDICAL = "medical"
    EDUCATION = "education"
    OTHER = "other"


class IncomeCategory(str, Enum):
    SALARY = "salary"
    BONUS = "bonus"
    INVESTMENT = "investment"
    GIFT = "gift"
    OTHER = "other"


class CategoryInfo(NamedTuple):
    label: str
    icon: str  # lucide icon id


# Map: category key → display data
CATEGORY_INFO: dict[str, CategoryInfo] = {
    # ── Expenses ──────────────────────────────────────
    "food": CategoryInfo("餐饮", "utensils"),
    "transport": CategoryInfo("交通", "car"),
    "shopping": CategoryInfo("购物", "shopping-bag"),
    "entertainment": CategoryInfo("娱乐", "gamepad-2"),
    "housing": CategoryInfo("住房", "home"),
    "medical": CategoryInfo("医疗", "heart"),
    "education": CategoryInfo("教育", "graduation-cap"),
    # ── Income ────────────────────────────────────────
    "salary": CategoryInfo("工资", "wallet"),
    "bonus": CategoryInfo("奖金", "gift"),
    "investment": CategoryInfo("投资", "trending-up"),
    "gift": CategoryInfo("礼金", "dollar-sign"),
    # ── Shared ────────────────────────────────────────
    "other": CategoryInfo("其他", "more-horizontal"),
}

_CATEGORIES_BY_TYPE: dict[BillType, type[Enum]] = {
    BillType.EXPENSE: ExpenseCategory,
    BillType.INCOME: IncomeCategory,
}


def categories_for(bill_type: BillType | str) -> list[str]:
    """Category keys valid for a bill type, in display order."""
    return [c.value for c in _CATEGORIES_BY_TYPE[BillType(bill_type)]]


def is_valid_category(bill_type: BillType | str, category: str) -> bool:
    return category in categories_for(bill_type)


def category_label(category: str) -> str:
    info = CATEGORY_INFO.get(category)
    return info.label if info else category


def category_icon(category: str) -> str:
    info = CATEGORY_INFO.get(category, CATEGORY_INFO["other"])
    return info.icon
