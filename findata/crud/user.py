# findata/crud/user.py
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional

from findata.core.db_utils import translate_db_errors
from findata.core.errors import ConflictError
from findata.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@translate_db_errors("look up user by email")
async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


@translate_db_errors("look up user by id")
async def get_user_by_id(user_id: int, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


@translate_db_errors("create user")
async def create_user(email: str, password_hash: str, company_name: str, db: AsyncSession) -> User:
    user = User(
        email=normalize_email(email),
        password_hash=password_hash,
        company_name=company_name,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        logger.info(f"Registration rejected by unique constraint for {user.email}")
        raise ConflictError()
    await db.refresh(user)
    return user
