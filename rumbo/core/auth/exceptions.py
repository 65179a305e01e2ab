"""
Core Authentication Exceptions
Excepciones centrales de autenticación
"""

from ..exceptions import (
    AuthenticationException,
    ErrorCode,
    GatewayTimeoutException,
    InternalServerException,
    UpstreamException,
    ValidationException,
)


class TokenExpiredException(AuthenticationException):
    """Token expirado"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_TOKEN_EXPIRED,
            message="Token expirado",
        )


class InvalidTokenException(AuthenticationException):
    """Token inválido"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_TOKEN_INVALID,
            message="Token inválido",
        )


class MissingTokenException(AuthenticationException):
    """No se proporcionó token"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_TOKEN_REQUIRED,
            message="Token de acceso requerido",
        )


class SigningKeyMissingException(InternalServerException):
    """JWT_SECRET_KEY no configurada"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.SYS_SIGNING_KEY_MISSING,
            message="Error de configuración del servidor",
        )


class UnrecognizedCredentialEncodingException(InternalServerException):
    """El hash almacenado no es bcrypt ni SHA-256"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.SYS_UNRECOGNIZED_HASH,
            message="Formato de contraseña no reconocido",
        )


class InvalidRoleException(ValidationException):
    """Rol fuera de la lista permitida"""

    def __init__(self, rol: str):
        super().__init__(
            error_code=ErrorCode.VAL_ROLE_INVALID,
            message="Rol inválido",
            details={"rol": rol},
        )


# ==================== Google userinfo ====================


class BridgeTokenInvalidException(AuthenticationException):
    """Google rechazó el access token"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_GOOGLE_TOKEN_INVALID,
            message="Token de Google inválido o expirado",
        )


class BridgeTokenMalformedException(ValidationException):
    """Access token mal formado"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.VAL_GOOGLE_TOKEN_MALFORMED,
            message="Token de Google mal formado",
        )


class BridgeTimeoutException(GatewayTimeoutException):
    """Google no respondió a tiempo"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.UPSTREAM_GOOGLE_TIMEOUT,
            message="Tiempo de espera agotado al contactar con Google",
        )


class NetworkErrorException(UpstreamException):
    """Fallo de red o de DNS al contactar con Google"""

    def __init__(self, reason: str = None):
        super().__init__(
            error_code=ErrorCode.UPSTREAM_NETWORK_ERROR,
            message="Error de red al contactar con Google",
            details={"motivo": reason} if reason else None,
        )
