"""Stats API routes — period statistics and home summary."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from billbook.api.deps import AuthUser, get_current_user, get_db, get_today
from billbook.config import settings
from billbook.schemas.stats import HomeSummaryResponse, StatsResponse
from billbook.services.stats import Period
from billbook.services.stats_service import StatsService

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
async def period_stats(
    period: Period = Period.MONTH,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """Income/expense totals and per-category breakdowns for a period.

    The period always ends today: the current week (from Monday), month or
    year. Category entries are ordered by amount, largest first.
    """
    service = StatsService(db)
    return await service.period_stats(current_user, period, today)


@router.get("/home", response_model=HomeSummaryResponse)
async def home_summary(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """Current month totals and the latest recorded bills."""
    service = StatsService(db)
    return await service.home_summary(current_user, today, settings.recent_bills_limit)
