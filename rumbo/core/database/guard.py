"""
Database Error Guard
Convierte errores del motor en ERROR_BASE_DATOS en el borde de cada operación
"""

import asyncio
import functools
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import AppException
from ..logging import get_logger
from .exceptions import DatabaseUnavailableException

logger = get_logger(__name__)

T = TypeVar("T")


def translate_db_errors(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Decorador para métodos de servicio

    Las AppException se propagan sin cambios; SQLAlchemyError, OSError y
    timeouts se registran y se relanzan como DatabaseUnavailableException.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except AppException:
            raise
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.exception(
                "database_operation_failed",
                operation=func.__qualname__,
                error_type=type(e).__name__,
            )
            raise DatabaseUnavailableException(func.__name__) from e

    return wrapper
