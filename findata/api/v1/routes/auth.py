# findata/api/v1/routes/auth.py
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from findata.api.deps import get_app_settings
from findata.core.config import Settings
from findata.core.database import get_async_session
from findata.core.errors import AuthError, ConflictError, ValidationError
from findata.core.security import create_access_token, get_password_hash, verify_password
from findata.crud.user import create_user, get_user_by_email
from findata.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

INVALID_CREDENTIALS = "Credenciais inválidas"
MISSING_CREDENTIALS = "Email e senha são obrigatórios"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_app_settings),
):
    """Create an account and return a token for it."""
    if await get_user_by_email(payload.email, db):
        raise ConflictError()

    # bcrypt is CPU bound; keep it off the event loop
    password_hash = await run_in_threadpool(get_password_hash, payload.password, settings)
    user = await create_user(payload.email, password_hash, payload.company_name, db)
    logger.info(f"Registered user {user.id}")

    token = create_access_token(user.id, user.email, settings)
    return AuthResponse(
        message="Usuário criado com sucesso",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_app_settings),
):
    if not payload.email.strip() or not payload.password:
        raise ValidationError(MISSING_CREDENTIALS)

    # Same message for unknown email and wrong password
    user = await get_user_by_email(payload.email, db)
    if user is None:
        logger.info("Login failed: unknown email")
        raise AuthError(INVALID_CREDENTIALS, status.HTTP_400_BAD_REQUEST)

    if not await run_in_threadpool(verify_password, payload.password, user.password_hash, settings):
        logger.info(f"Login failed: wrong password for user {user.id}")
        raise AuthError(INVALID_CREDENTIALS, status.HTTP_400_BAD_REQUEST)

    token = create_access_token(user.id, user.email, settings)
    return AuthResponse(
        message="Login realizado com sucesso",
        token=token,
        user=UserRead.model_validate(user),
    )
