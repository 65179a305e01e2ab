"""
Auth Domain Exceptions
Excepciones del dominio de autenticación
"""

from ...core.exceptions import (
    AuthenticationException,
    ConflictException,
    ErrorCode,
    InternalServerException,
    NotFoundException,
    ValidationException,
)


# ==================== Login ====================


class IncompleteCredentialsException(ValidationException):
    """Falta identificador o contraseña"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_INCOMPLETE_CREDENTIALS,
            message="Email/usuario y contraseña son requeridos",
        )


class UserNotFoundException(NotFoundException):
    """No existe el usuario"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_USER_NOT_FOUND,
            message="Usuario no encontrado",
        )


class InvalidAccountCredentialDataException(InternalServerException):
    """La cuenta no tiene una contraseña utilizable"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.SYS_INVALID_CREDENTIAL_DATA,
            message="Error en los datos del usuario",
        )


class IncorrectPasswordException(AuthenticationException):
    """Contraseña incorrecta"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_INCORRECT_PASSWORD,
            message="Contraseña incorrecta",
        )


class CurrentPasswordIncorrectException(ValidationException):
    """La contraseña actual no coincide (400: la sesión sigue siendo válida)"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_CURRENT_PASSWORD_INCORRECT,
            message="La contraseña actual es incorrecta",
        )


# ==================== Registration ====================


class NameRequiredException(ValidationException):
    def __init__(self):
        super().__init__(error_code=ErrorCode.VAL_NAME_REQUIRED, message="El nombre es requerido")


class EmailRequiredException(ValidationException):
    def __init__(self):
        super().__init__(error_code=ErrorCode.VAL_EMAIL_REQUIRED, message="El email es requerido")


class InvalidEmailException(ValidationException):
    def __init__(self):
        super().__init__(error_code=ErrorCode.VAL_EMAIL_INVALID, message="El formato del email no es válido")


class PasswordRequiredException(ValidationException):
    def __init__(self):
        super().__init__(
            error_code=ErrorCode.VAL_PASSWORD_REQUIRED, message="La contraseña es requerida"
        )


class PasswordTooShortException(ValidationException):
    def __init__(self, min_length: int = 6):
        super().__init__(
            error_code=ErrorCode.VAL_PASSWORD_TOO_SHORT,
            message=f"La contraseña debe tener al menos {min_length} caracteres",
            details={"minimo": min_length},
        )


class UsernameRequiredException(ValidationException):
    def __init__(self):
        super().__init__(
            error_code=ErrorCode.VAL_USERNAME_REQUIRED, message="El nombre de usuario es requerido"
        )


class UsernameTooShortException(ValidationException):
    def __init__(self, min_length: int = 3):
        super().__init__(
            error_code=ErrorCode.VAL_USERNAME_TOO_SHORT,
            message=f"El nombre de usuario debe tener al menos {min_length} caracteres",
            details={"minimo": min_length},
        )


class RoleRequiredException(ValidationException):
    def __init__(self):
        super().__init__(error_code=ErrorCode.VAL_ROLE_REQUIRED, message="El rol es requerido")


class EmailTakenException(ConflictException):
    """Email ya registrado"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_EMAIL_TAKEN,
            message="El email ya está registrado",
        )


class UsernameTakenException(ConflictException):
    """Nombre de usuario ya en uso"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_USERNAME_TAKEN,
            message="El nombre de usuario ya está en uso",
        )


class DuplicateUserException(ConflictException):
    """Violación de unicidad detectada al insertar"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_DUPLICATE_USER,
            message="El usuario ya existe",
        )
