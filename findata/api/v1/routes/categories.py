# findata/api/v1/routes/categories.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from findata.api.deps import get_current_user
from findata.core.database import get_async_session
from findata.crud.category import get_categories_for_user
from findata.schemas.category import CategoryRead
from findata.schemas.user import CurrentUser

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryRead])
async def read_categories(
    db: AsyncSession = Depends(get_async_session),
    user: CurrentUser = Depends(get_current_user),
):
    return await get_categories_for_user(user.id, db)
