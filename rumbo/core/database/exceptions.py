"""
Database Exceptions
Errores de acceso a la base de datos
"""

from ..exceptions import ErrorCode, UpstreamException


class DatabaseUnavailableException(UpstreamException):
    """Fallo de conexión, timeout o error del motor de base de datos"""

    def __init__(self, operation: str = None):
        super().__init__(
            error_code=ErrorCode.UPSTREAM_DATABASE_ERROR,
            message="Error de conexión con la base de datos",
            details={"operacion": operation} if operation else None,
        )
