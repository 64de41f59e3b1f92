"""Category API routes."""

from fastapi import APIRouter, Depends

from billbook.api.deps import AuthUser, get_current_user
from billbook.schemas.stats import CategoryListResponse
from billbook.services.categories import BillType, categories_for, category_icon, category_label

router = APIRouter()


@router.get("", response_model=list[CategoryListResponse])
async def list_categories(
    type: BillType | None = None,
    current_user: AuthUser = Depends(get_current_user),
):
    """Category choices per bill type, in display order."""
    bill_types = [type] if type else [BillType.EXPENSE, BillType.INCOME]
    return [
        {
            "type": bill_type,
            "categories": [
                {"value": key, "label": category_label(key), "icon": category_icon(key)}
                for key in categories_for(bill_type)
            ],
        }
        for bill_type in bill_types
    ]
