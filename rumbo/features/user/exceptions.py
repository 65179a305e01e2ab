"""
User Domain Exceptions
Excepciones de perfiles y seguimiento
"""

from ...core.exceptions import (
    AuthorizationException,
    ConflictException,
    ErrorCode,
    NotFoundException,
    ValidationException,
)


class PrivateProfileException(AuthorizationException):
    """Perfil privado y el solicitante no lo sigue"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_PRIVATE_PROFILE,
            message="Este perfil es privado",
        )


class NoDataToUpdateException(ValidationException):
    """La petición de actualización no trae campos válidos"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.VAL_NO_DATA_TO_UPDATE,
            message="No se proporcionaron datos para actualizar",
        )


class SearchTermTooShortException(ValidationException):
    def __init__(self, min_length: int = 2):
        super().__init__(
            error_code=ErrorCode.VAL_SEARCH_TOO_SHORT,
            message=f"El término de búsqueda debe tener al menos {min_length} caracteres",
        )


class SelfFollowException(ValidationException):
    def __init__(self):
        super().__init__(
            error_code=ErrorCode.VAL_SELF_FOLLOW,
            message="No puedes seguirte a ti mismo",
        )


class AlreadyFollowingException(ConflictException):
    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_ALREADY_FOLLOWING,
            message="Ya sigues a este usuario",
        )


class NotFollowingException(NotFoundException):
    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_NOT_FOLLOWING,
            message="No sigues a este usuario",
        )
