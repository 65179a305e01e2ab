"""
Vocational Exceptions
"""

from ...core.exceptions import ErrorCode, NotFoundException, ValidationException


class VocationalDataRequiredException(ValidationException):
    """Faltan respuestas, carreras o zona_ikigai"""

    def __init__(self, missing=None):
        super().__init__(
            error_code=ErrorCode.VAL_VOCATIONAL_DATA_REQUIRED,
            message="Los campos respuestas, carreras y zona_ikigai son requeridos",
            details={"faltantes": missing} if missing else None,
        )


class VocationalResultNotFoundException(NotFoundException):
    """Sin resultados, o el resultado es de otro usuario"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_RESULT_NOT_FOUND,
            message="Resultado vocacional no encontrado",
        )
