# findata/api/v1/routes/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from findata.api.deps import get_current_user
from findata.core.database import get_async_session
from findata.core.errors import NotFoundError
from findata.crud.user import get_user_by_id
from findata.schemas.user import CurrentUser, UserRead

router = APIRouter(prefix="/users", tags=["User Management"])


@router.get("/me", response_model=UserRead)
async def read_current_user(
    db: AsyncSession = Depends(get_async_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Public profile of the authenticated user."""
    db_user = await get_user_by_id(user.id, db)
    if db_user is None:
        raise NotFoundError("Usuário não encontrado")
    return db_user
