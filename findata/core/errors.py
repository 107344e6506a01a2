"""
Application error taxonomy and the FastAPI handlers that render it.

Every error leaves the API as ``{"error": "<message>"}``. Messages are meant
for end users; store and stack details only go to the server log.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Erro interno do servidor"

# First failing field -> user-facing message
FIELD_MESSAGES = {
    "email": "Email inválido ou ausente",
    "password": "Senha deve ter pelo menos 6 caracteres",
    "company_name": "Nome da empresa é obrigatório",
    "type": "Tipo deve ser 'income' ou 'expense'",
    "amount": "Valor deve ser maior que zero",
    "description": "Descrição é obrigatória",
    "category": "Categoria é obrigatória",
    "transaction_date": "Data da transação é obrigatória",
    "page": "Página deve ser um inteiro positivo",
    "limit": "Limite deve ser um inteiro entre 1 e 100",
    "start_date": "Data inicial inválida",
    "end_date": "Data final inválida",
    "transaction_id": "Identificador de transação inválido",
}


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = GENERIC_ERROR_MESSAGE

    def __init__(self, message=None, status_code=None):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Dados inválidos"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email já cadastrado"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token de acesso requerido"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Recurso não encontrado"


class InternalError(AppError):
    pass


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def first_error_message(exc: RequestValidationError) -> str:
    """Pick the message for the first failing field of a request."""
    errors = exc.errors()
    if not errors:
        return ValidationError.message
    loc = [part for part in errors[0].get("loc", ()) if isinstance(part, str)]
    # loc looks like ("body", "amount") or ("query", "page"); a missing body is ("body",)
    field = loc[-1] if len(loc) > 1 else None
    if field in FIELD_MESSAGES:
        return FIELD_MESSAGES[field]
    if field:
        return f"Campo inválido: {field}"
    return ValidationError.message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
        return error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, first_error_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Rota não encontrada"
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = "Método não permitido"
        else:
            message = str(exc.detail)
        return error_response(exc.status_code, message, getattr(exc, "headers", None))

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)
