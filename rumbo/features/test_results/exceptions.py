"""
Test Results Exceptions
"""

from ...core.exceptions import (
    AuthorizationException,
    ErrorCode,
    NotFoundException,
    ValidationException,
)


class TestNotFoundException(NotFoundException):
    """El test no existe o no está activo"""

    def __init__(self, test_id=None):
        super().__init__(
            error_code=ErrorCode.BIZ_TEST_NOT_FOUND,
            message="Test no encontrado",
            details={"test_id": test_id} if test_id is not None else None,
        )


class TestDataRequiredException(ValidationException):
    """Faltan testId o puntuacion"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.VAL_TEST_DATA_REQUIRED,
            message="Los campos testId y puntuacion son requeridos",
        )


class ResultNotFoundException(NotFoundException):
    """Resultado inexistente o de otro usuario"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_RESULT_NOT_FOUND,
            message="Resultado no encontrado",
        )


class ResultNotOwnedException(AuthorizationException):
    """El resultado existe pero pertenece a otro usuario"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_RESULT_NOT_OWNED,
            message="No tienes permiso para modificar este resultado",
        )
