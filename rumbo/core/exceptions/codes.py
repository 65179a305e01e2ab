"""
Error Code Definitions
Códigos de error estables expuestos al cliente (campo `codigo`)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Códigos de error de la aplicación

    El valor de cada miembro es el contrato con el cliente: no cambiarlo.

    Grupos:
    - AUTH_xxx: autenticación (401)
    - VAL_xxx: validación de entrada (400, 422)
    - BIZ_xxx: reglas de negocio (403, 404, 409)
    - UPSTREAM_xxx: dependencias externas (502, 504)
    - SYS_xxx: integridad de datos y configuración (500)
    """

    # ==================== Authentication (AUTH_xxx) ====================
    AUTH_INCOMPLETE_CREDENTIALS = "CREDENCIALES_INCOMPLETAS"
    """Faltan identificador o contraseña"""

    AUTH_INCORRECT_PASSWORD = "CONTRASENA_INCORRECTA"
    """La contraseña no coincide"""

    AUTH_CURRENT_PASSWORD_INCORRECT = "CONTRASENA_ACTUAL_INCORRECTA"
    """La contraseña actual no coincide (cambio de contraseña)"""

    AUTH_TOKEN_REQUIRED = "TOKEN_REQUERIDO"
    """No se envió token"""

    AUTH_TOKEN_INVALID = "TOKEN_INVALIDO"
    """Token mal formado o con firma inválida"""

    AUTH_TOKEN_EXPIRED = "TOKEN_EXPIRADO"
    """Token expirado"""

    AUTH_GOOGLE_TOKEN_INVALID = "GOOGLE_TOKEN_INVALIDO"
    """Google rechazó el access token (401)"""

    # ==================== Validation (VAL_xxx) ====================
    VAL_INVALID_INPUT = "DATOS_INVALIDOS"
    """Cuerpo de la petición con forma inválida"""

    VAL_NAME_REQUIRED = "NOMBRE_REQUERIDO"
    VAL_EMAIL_REQUIRED = "EMAIL_REQUERIDO"
    VAL_EMAIL_INVALID = "EMAIL_INVALIDO"
    VAL_PASSWORD_REQUIRED = "CONTRASENA_REQUERIDA"
    VAL_PASSWORD_TOO_SHORT = "CONTRASENA_MUY_CORTA"
    VAL_USERNAME_REQUIRED = "NOMBRE_USUARIO_REQUERIDO"
    VAL_USERNAME_TOO_SHORT = "NOMBRE_USUARIO_MUY_CORTO"
    VAL_ROLE_REQUIRED = "ROL_REQUERIDO"
    VAL_ROLE_INVALID = "ROL_INVALIDO"

    VAL_GOOGLE_TOKEN_MALFORMED = "GOOGLE_TOKEN_MALFORMADO"
    """Google respondió 400 al access token"""

    VAL_NO_DATA_TO_UPDATE = "SIN_DATOS_ACTUALIZAR"
    VAL_SEARCH_TOO_SHORT = "BUSQUEDA_MUY_CORTA"
    VAL_SELF_FOLLOW = "AUTO_SEGUIMIENTO"
    VAL_TEST_DATA_REQUIRED = "DATOS_TEST_REQUERIDOS"
    VAL_VOCATIONAL_DATA_REQUIRED = "DATOS_VOCACIONALES_REQUERIDOS"

    # ==================== Business Logic (BIZ_xxx) ====================
    BIZ_RESOURCE_NOT_FOUND = "RECURSO_NO_ENCONTRADO"
    BIZ_USER_NOT_FOUND = "USUARIO_NO_ENCONTRADO"
    BIZ_TEST_NOT_FOUND = "TEST_NO_ENCONTRADO"
    BIZ_RESULT_NOT_FOUND = "RESULTADO_NO_ENCONTRADO"
    BIZ_RESULT_NOT_OWNED = "RESULTADO_AJENO"
    BIZ_NOT_FOLLOWING = "NO_SIGUE_USUARIO"

    BIZ_PRIVATE_PROFILE = "PERFIL_PRIVADO"
    """Perfil privado y el solicitante no lo sigue"""

    BIZ_EMAIL_TAKEN = "EMAIL_EN_USO"
    BIZ_USERNAME_TAKEN = "NOMBRE_USUARIO_EN_USO"
    BIZ_DUPLICATE_USER = "USUARIO_DUPLICADO"
    BIZ_ALREADY_FOLLOWING = "YA_SIGUE_USUARIO"

    # ==================== Upstream (UPSTREAM_xxx) ====================
    UPSTREAM_GOOGLE_TIMEOUT = "GOOGLE_TIMEOUT"
    UPSTREAM_NETWORK_ERROR = "ERROR_RED"
    UPSTREAM_DATABASE_ERROR = "ERROR_BASE_DATOS"

    # ==================== System (SYS_xxx) ====================
    SYS_INTERNAL_ERROR = "ERROR_INTERNO"
    SYS_SIGNING_KEY_MISSING = "CLAVE_FIRMA_FALTANTE"
    SYS_INVALID_CREDENTIAL_DATA = "DATOS_CREDENCIAL_INVALIDOS"
    SYS_UNRECOGNIZED_HASH = "FORMATO_HASH_DESCONOCIDO"
