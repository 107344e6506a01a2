# findata/crud/dashboard.py
import asyncio
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import extract, func
from typing import Any, Awaitable, Callable, Dict, List, Optional

from findata.core.database import Database
from findata.core.db_utils import translate_db_errors
from findata.crud.transaction import date_range_conditions, get_recent_transactions
from findata.models.transaction import Transaction
from findata.schemas.transaction import TransactionRead

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 5
TREND_MONTHS = 6
CENT = Decimal("0.01")


def to_cents(value) -> Decimal:
    """Sum from the store (float, Decimal or None) as an exact 2-place Decimal."""
    # str() first so float noise like 0.30000000000000004 is not carried over
    return Decimal(str(value or 0)).quantize(CENT, rounding=ROUND_HALF_UP)


def shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trend_window(today: date):
    """First day of the oldest month in the trend and first day of next month."""
    start_year, start_month = shift_month(today.year, today.month, -(TREND_MONTHS - 1))
    end_year, end_month = shift_month(today.year, today.month, 1)
    return date(start_year, start_month, 1), date(end_year, end_month, 1)


@translate_db_errors("sum transactions")
async def total_for_type(
    db: AsyncSession, user_id: int, tx_type: str, start_date: Optional[date], end_date: Optional[date]
) -> Decimal:
    total = await db.scalar(
        select(func.coalesce(func.sum(Transaction.amount), 0))
        .where(
            Transaction.user_id == user_id,
            Transaction.type == tx_type,
            *date_range_conditions(start_date, end_date),
        )
    )
    return to_cents(total)


@translate_db_errors("build category breakdown")
async def category_breakdown(
    db: AsyncSession, user_id: int, start_date: Optional[date], end_date: Optional[date]
) -> List[Dict[str, Any]]:
    total_expr = func.sum(Transaction.amount)
    result = await db.execute(
        select(Transaction.category, Transaction.type, total_expr.label("total"))
        .where(Transaction.user_id == user_id, *date_range_conditions(start_date, end_date))
        .group_by(Transaction.category, Transaction.type)
        .order_by(total_expr.desc(), Transaction.category, Transaction.type)
    )
    return [
        {"category": row.category, "type": row.type, "total": to_cents(row.total)}
        for row in result.all()
    ]


@translate_db_errors("build monthly trend")
async def monthly_trend(db: AsyncSession, user_id: int, today: date) -> List[Dict[str, Any]]:
    window_start, window_end = trend_window(today)
    year_expr = extract("year", Transaction.transaction_date)
    month_expr = extract("month", Transaction.transaction_date)
    result = await db.execute(
        select(
            year_expr.label("year"),
            month_expr.label("month"),
            Transaction.type,
            func.sum(Transaction.amount).label("total"),
        )
        .where(
            Transaction.user_id == user_id,
            Transaction.transaction_date >= window_start,
            Transaction.transaction_date < window_end,
        )
        .group_by(year_expr, month_expr, Transaction.type)
        .order_by(year_expr, month_expr, Transaction.type)
    )
    return [
        {
            "month": f"{int(row.year):04d}-{int(row.month):02d}",
            "type": row.type,
            "total": to_cents(row.total),
        }
        for row in result.all()
    ]


async def _with_session(database: Database, query: Callable[..., Awaitable[Any]], *args: Any) -> Any:
    # One session per aggregate so the queries can run side by side
    async with database.session_factory() as session:
        return await query(session, *args)


async def build_dashboard(
    database: Database,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Run the five dashboard aggregates concurrently and assemble them.

    The aggregates are independent reads; they are not wrapped in a shared
    snapshot, so a concurrent write may be visible in some and not others.
    The monthly trend ignores the date range and always covers the trailing
    six calendar months up to ``today``.
    """
    today = today or date.today()

    income, expenses, recent, breakdown, trend = await asyncio.gather(
        _with_session(database, total_for_type, user_id, "income", start_date, end_date),
        _with_session(database, total_for_type, user_id, "expense", start_date, end_date),
        _with_session(
            database, get_recent_transactions, user_id, RECENT_TRANSACTIONS_LIMIT, start_date, end_date
        ),
        _with_session(database, category_breakdown, user_id, start_date, end_date),
        _with_session(database, monthly_trend, user_id, today),
    )

    logger.debug(f"Dashboard for user {user_id}: income={income} expenses={expenses}")
    return {
        "summary": {
            "totalIncome": income,
            "totalExpenses": expenses,
            "balance": income - expenses,
        },
        "recentTransactions": [TransactionRead.model_validate(tx) for tx in recent],
        "categoryBreakdown": breakdown,
        "monthlyTrend": trend,
    }
