"""
Global Exception Handlers
Handlers globales de excepciones
"""

from enum import Enum

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from rumbo.core.logging import get_logger
from .base import AppException
from .schemas import ErrorResponse, ValidationErrorResponse, ErrorDetail
from .codes import ErrorCode

logger = get_logger(__name__)


def _request_id() -> str:
    return correlation_id.get() or ""


def _code(error_code) -> str:
    return error_code.value if isinstance(error_code, Enum) else str(error_code)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handler de excepciones de la aplicación

    Args:
        request: Request de FastAPI
        exc: instancia de AppException

    Returns:
        JSONResponse: sobre de error estándar
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app_exception",
        codigo=_code(exc.error_code),
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method,
    )

    error_response = ErrorResponse(
        error=exc.message,
        codigo=_code(exc.error_code),
        request_id=_request_id(),
        path=str(request.url.path),
        detalles=exc.details if exc.details else None,
    )

    return JSONResponse(
        status_code=exc.status_code, content=error_response.model_dump(mode="json")
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Errores de validación de pydantic (422 Unprocessable Entity)
    """
    errors = []
    for error in exc.errors():
        field_path = " -> ".join(str(loc) for loc in error["loc"])
        errors.append(
            ErrorDetail(campo=field_path, mensaje=error["msg"], tipo=error.get("type", ""))
        )

    logger.warning(
        "validation_error",
        path=request.url.path,
        method=request.method,
        campos=[e.campo for e in errors],
    )

    error_response = ValidationErrorResponse(
        error="Datos de entrada inválidos",
        codigo=ErrorCode.VAL_INVALID_INPUT.value,
        request_id=_request_id(),
        path=str(request.url.path),
        errores=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Convierte HTTPException de Starlette (p. ej. 404 de rutas) al sobre estándar
    """
    error_code_map = {
        400: ErrorCode.VAL_INVALID_INPUT,
        401: ErrorCode.AUTH_TOKEN_INVALID,
        404: ErrorCode.BIZ_RESOURCE_NOT_FOUND,
        405: ErrorCode.BIZ_RESOURCE_NOT_FOUND,
        500: ErrorCode.SYS_INTERNAL_ERROR,
    }

    error_code = error_code_map.get(exc.status_code, ErrorCode.SYS_INTERNAL_ERROR)

    logger.warning(
        "http_exception",
        detail=str(exc.detail),
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method,
    )

    error_response = ErrorResponse(
        error=str(exc.detail),
        codigo=error_code.value,
        request_id=_request_id(),
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Cualquier excepción no prevista → 500 ERROR_INTERNO
    """
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        exception_type=type(exc).__name__,
    )

    # El detalle solo se expone en modo debug
    settings = getattr(request.app.state, "settings", None)
    details = (
        {"error": str(exc), "tipo": type(exc).__name__}
        if settings is not None and settings.debug
        else None
    )

    error_response = ErrorResponse(
        error="Error interno del servidor",
        codigo=ErrorCode.SYS_INTERNAL_ERROR.value,
        request_id=_request_id(),
        path=str(request.url.path),
        detalles=details,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registra todos los handlers globales en la aplicación"""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
