"""
Retry Utilities
Reintentos con backoff exponencial (solo arranque; las peticiones nunca reintentan)
"""

import asyncio
from typing import Any, Awaitable, Callable, Tuple, Type, TypeVar

from ..logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def calculate_retry_delay(attempt: int, base_delay: float, exponential: bool = True) -> float:
    """
    Calcula la espera antes del siguiente intento

    Args:
        attempt: intento actual (empieza en 1)
        base_delay: espera base en segundos
        exponential: duplicar la espera en cada intento

    Returns:
        float: espera en segundos
    """
    if exponential:
        # attempt=1 → base, attempt=2 → base*2, attempt=3 → base*4
        return base_delay * (2 ** (attempt - 1))
    return base_delay


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    max_attempts: int,
    base_delay: float,
    operation: str = "Operation",
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    **kwargs: Any,
) -> T:
    """
    Ejecuta `func` hasta `max_attempts` veces

    Args:
        func: función asíncrona a ejecutar
        max_attempts: número máximo de intentos (>= 1)
        base_delay: espera base entre intentos
        operation: nombre de la operación para los logs
        retry_on: excepciones que provocan reintento; el resto se propaga
        **kwargs: argumentos para `func`

    Returns:
        T: valor devuelto por `func`

    Raises:
        RuntimeError: todos los intentos fallaron
    """
    last_error = None

    for attempt in range(1, max_attempts + 1):
        try:
            result = await func(**kwargs)

            if attempt > 1:
                logger.info("retry_succeeded", operation=operation, attempt=attempt, max_attempts=max_attempts)

            return result

        except retry_on as e:
            last_error = e
            logger.warning(
                "retry_attempt_failed",
                operation=operation,
                attempt=attempt,
                max_attempts=max_attempts,
                error=str(e),
            )

            if attempt < max_attempts:
                delay = calculate_retry_delay(attempt, base_delay)
                logger.info("retry_scheduled", operation=operation, delay=round(delay, 2))
                await asyncio.sleep(delay)

    logger.error("retry_exhausted", operation=operation, max_attempts=max_attempts, error=str(last_error))
    raise RuntimeError(
        f"{operation} failed after {max_attempts} attempts: {last_error}"
    ) from last_error
