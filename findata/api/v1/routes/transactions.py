# findata/api/v1/routes/transactions.py
import logging
import math
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from findata.api.deps import get_current_user, parse_query
from findata.core.database import get_async_session
from findata.core.errors import NotFoundError
from findata.crud.transaction import (
    create_transaction_for_user,
    list_transactions_for_user,
    get_transaction_by_id,
    update_transaction,
    delete_transaction,
)
from findata.schemas.transaction import (
    Pagination,
    TransactionCreate,
    TransactionFilters,
    TransactionListResponse,
    TransactionRead,
    TransactionResponse,
    TransactionUpdate,
)
from findata.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

MAX_PAGE_SIZE = 100


def transaction_filters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    type: Optional[str] = Query(None, description="income or expense; empty means any"),
    category: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD; empty means unbounded"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD; empty means unbounded"),
) -> TransactionFilters:
    return parse_query(
        TransactionFilters,
        page=page,
        limit=limit,
        type=type,
        category=category,
        start_date=start_date,
        end_date=end_date,
    )


async def get_owned_transaction(transaction_id: int, user_id: int, db: AsyncSession):
    tx = await get_transaction_by_id(transaction_id, user_id, db)
    if not tx:
        raise NotFoundError("Transação não encontrada")
    return tx


@router.get("", response_model=TransactionListResponse)
async def read_transactions(
    user: CurrentUser = Depends(get_current_user),
    filters: TransactionFilters = Depends(transaction_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """List the user's transactions, newest first, with optional filters."""
    transactions, total = await list_transactions_for_user(user.id, filters, db)
    return TransactionListResponse(
        transactions=[TransactionRead.model_validate(tx) for tx in transactions],
        pagination=Pagination(
            page=filters.page,
            limit=filters.limit,
            total=total,
            pages=math.ceil(total / filters.limit),
        ),
    )


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: CurrentUser = Depends(get_current_user),
):
    tx = await create_transaction_for_user(user.id, tx_in, db)
    logger.info(f"User {user.id} created transaction {tx.id}")
    return TransactionResponse(
        message="Transação criada com sucesso",
        transaction=TransactionRead.model_validate(tx),
    )


@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_async_session),
    user: CurrentUser = Depends(get_current_user),
):
    return await get_owned_transaction(transaction_id, user.id, db)


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction_endpoint(
    transaction_id: int,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: CurrentUser = Depends(get_current_user),
):
    tx = await get_owned_transaction(transaction_id, user.id, db)
    tx = await update_transaction(tx, tx_in, db)
    return TransactionResponse(
        message="Transação atualizada com sucesso",
        transaction=TransactionRead.model_validate(tx),
    )


@router.delete("/{transaction_id}")
async def delete_transaction_endpoint(
    transaction_id: int,
    db: AsyncSession = Depends(get_async_session),
    user: CurrentUser = Depends(get_current_user),
):
    tx = await get_owned_transaction(transaction_id, user.id, db)
    await delete_transaction(tx, db)
    logger.info(f"User {user.id} deleted transaction {transaction_id}")
    return {"message": "Transação excluída com sucesso"}
