"""
Database utilities for error handling
"""
import functools
import logging
from typing import Callable, Any, TypeVar, Awaitable

from sqlalchemy.exc import SQLAlchemyError

from findata.core.errors import InternalError

logger = logging.getLogger(__name__)

# Define a type variable for the return type of the decorated function
T = TypeVar('T')

def translate_db_errors(
    operation: str
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that turns store failures into InternalError.

    The SQLAlchemy error is logged with the operation name; the client only
    ever sees the generic message. Nothing is retried.

    Args:
        operation: Short description used in the log line

    Returns:
        Decorated coroutine function
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"Database error while trying to {operation}: {type(e).__name__}: {e}")
                raise InternalError() from e
        return wrapper
    return decorator
