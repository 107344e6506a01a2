# findata/api/v1/routes/dashboard.py
from fastapi import APIRouter, Depends, Query
from typing import Optional

from findata.api.deps import get_current_user, get_database, parse_query
from findata.core.database import Database
from findata.crud.dashboard import build_dashboard
from findata.schemas.dashboard import DashboardResponse
from findata.schemas.transaction import DateRange
from findata.schemas.user import CurrentUser

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def date_range(
    start_date: Optional[str] = Query(None, description="Inclusive lower bound (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Inclusive upper bound (YYYY-MM-DD)"),
) -> DateRange:
    return parse_query(DateRange, start_date=start_date, end_date=end_date)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user: CurrentUser = Depends(get_current_user),
    period: DateRange = Depends(date_range),
    database: Database = Depends(get_database),
):
    """
    Returns the dashboard for the authenticated user:
    - summary: total income, total expenses and balance in the date range
    - recentTransactions: the five newest transactions in the date range
    - categoryBreakdown: totals per (category, type) in the date range
    - monthlyTrend: totals per (month, type) over the last six months
    """
    return await build_dashboard(database, user.id, period.start_date, period.end_date)
