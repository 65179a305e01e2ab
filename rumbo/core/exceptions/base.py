"""
Base Exception Classes
Clases base de excepciones
"""

from typing import Optional, Dict, Any
from fastapi import status


class AppException(Exception):
    """
    Excepción base de la aplicación

    Clase base de todas las excepciones propias. Los handlers globales la
    convierten en el sobre de error `{exito: false, error, codigo}`.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            error_code: código estable (p. ej. CONTRASENA_INCORRECTA)
            message: mensaje legible para el usuario
            status_code: código de estado HTTP
            details: información adicional (opcional)
        """
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code!r}, "
            f"message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class AuthenticationException(AppException):
    """
    Fallo de autenticación (401 Unauthorized)
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
        )


class AuthorizationException(AppException):
    """
    Permisos insuficientes (403 Forbidden)

    Autenticado pero sin acceso al recurso
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class ValidationException(AppException):
    """
    Entrada inválida (400 Bad Request)
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class NotFoundException(AppException):
    """
    Recurso inexistente (404 Not Found)
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class ConflictException(AppException):
    """
    Conflicto de estado (409 Conflict)

    p. ej. email ya registrado o seguimiento duplicado
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class UpstreamException(AppException):
    """
    Fallo de una dependencia externa (502 Bad Gateway)

    Google, red o base de datos
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
        )


class GatewayTimeoutException(AppException):
    """
    Dependencia externa sin respuesta a tiempo (504 Gateway Timeout)
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            details=details,
        )


class InternalServerException(AppException):
    """
    Error interno (500 Internal Server Error)

    Datos inconsistentes o configuración incompleta
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )
