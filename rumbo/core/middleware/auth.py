"""
Request Context Middleware
Inicializa el contexto de usuario y de logging de cada petición
"""

import time

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..logging import get_logger

logger = get_logger("rumbo.access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Deja `request.state.usuario` en None hasta que la dependencia de
    autenticación lo rellene, y registra cada petición completada.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.usuario = None

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(elapsed_ms, 1),
        )
        return response
