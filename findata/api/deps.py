# findata/api/deps.py
from typing import Optional, Type, TypeVar
from fastapi import Depends, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError as PydanticValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from findata.core.config import Settings
from findata.core.database import Database
from findata.core.errors import AuthError
from findata.core.security import decode_access_token
from findata.schemas.user import CurrentUser

ModelT = TypeVar("ModelT", bound=BaseModel)

# auto_error=False so a missing header reaches our own error envelope
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.db


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Resolve the bearer token in the Authorization header to an identity.

    - No token: 401
    - Bad signature, expired or malformed payload: 403

    The identity is also stored on ``request.state.user`` for downstream code.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Token de acesso requerido", status.HTTP_401_UNAUTHORIZED)

    identity = decode_access_token(credentials.credentials, settings)
    if identity is None:
        raise AuthError("Token inválido ou expirado", status.HTTP_403_FORBIDDEN)

    user = CurrentUser(**identity)
    request.state.user = user
    return user


def parse_query(model: Type[ModelT], **params) -> ModelT:
    """Build a query model, reporting failures like FastAPI's own query validation."""
    try:
        return model(**params)
    except PydanticValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("query", *error["loc"])} for error in exc.errors()]
        )
