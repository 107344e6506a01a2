# findata/crud/transaction.py
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, func
from typing import List, Optional, Tuple

from findata.core.db_utils import translate_db_errors
from findata.models.transaction import Transaction
from findata.models.user import utcnow
from findata.schemas.transaction import TransactionCreate, TransactionFilters, TransactionUpdate

# Newest first; created_at breaks ties between same-day entries
NEWEST_FIRST = (desc(Transaction.transaction_date), desc(Transaction.created_at), desc(Transaction.id))


def date_range_conditions(start_date: Optional[date], end_date: Optional[date]) -> list:
    conditions = []
    if start_date is not None:
        conditions.append(Transaction.transaction_date >= start_date)
    if end_date is not None:
        conditions.append(Transaction.transaction_date <= end_date)
    return conditions


def filter_conditions(user_id: int, filters: TransactionFilters) -> list:
    """All provided filters, AND-ed, always scoped to the owner."""
    conditions = [Transaction.user_id == user_id]
    if filters.type is not None:
        conditions.append(Transaction.type == filters.type.value)
    if filters.category:
        conditions.append(Transaction.category == filters.category.strip())
    conditions.extend(date_range_conditions(filters.start_date, filters.end_date))
    return conditions


@translate_db_errors("list transactions")
async def list_transactions_for_user(
    user_id: int, filters: TransactionFilters, db: AsyncSession
) -> Tuple[List[Transaction], int]:
    conditions = filter_conditions(user_id, filters)

    total = await db.scalar(select(func.count(Transaction.id)).where(*conditions))

    result = await db.execute(
        select(Transaction)
        .where(*conditions)
        .order_by(*NEWEST_FIRST)
        .limit(filters.limit)
        .offset(filters.offset)
    )
    return list(result.scalars().all()), int(total or 0)


@translate_db_errors("load recent transactions")
async def get_recent_transactions(
    db: AsyncSession,
    user_id: int,
    limit: int = 5,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Transaction]:
    """Get the most recent transactions for a user, honoring an optional date range"""
    result = await db.execute(
        select(Transaction)
        .where(Transaction.user_id == user_id, *date_range_conditions(start_date, end_date))
        .order_by(*NEWEST_FIRST)
        .limit(limit)
    )
    return list(result.scalars().all())


@translate_db_errors("load transaction")
async def get_transaction_by_id(transaction_id: int, user_id: int, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()


@translate_db_errors("create transaction")
async def create_transaction_for_user(user_id: int, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    new_tx = Transaction(
        user_id=user_id,
        type=tx_in.type.value,
        amount=tx_in.amount,
        description=tx_in.description,
        category=tx_in.category,
        transaction_date=tx_in.transaction_date,
    )
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx


@translate_db_errors("update transaction")
async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    for field, value in tx_in.model_dump(exclude_unset=True).items():
        if field == "type":
            value = value.value
        setattr(tx, field, value)
    # An empty update still counts as a modification
    tx.updated_at = utcnow()
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx


@translate_db_errors("delete transaction")
async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    await db.delete(tx)
    await db.commit()
