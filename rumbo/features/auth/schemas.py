"""
Auth Schemas
Esquemas de petición y respuesta de autenticación
"""

import uuid
from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ==================== Request Schemas ====================
# Los campos son opcionales: el servicio responde con el código concreto
# (CREDENCIALES_INCOMPLETAS, NOMBRE_REQUERIDO, ...) en lugar de un 422.


class LoginRequest(BaseModel):
    """Login con email o nombre de usuario"""

    identificador: Optional[str] = Field(
        None,
        description="Email o nombre de usuario",
        validation_alias=AliasChoices("identificador", "email", "nombreUsuario"),
    )
    contrasena: Optional[str] = Field(None, description="Contraseña")

    model_config = ConfigDict(
        json_schema_extra={"example": {"identificador": "ana@x.com", "contrasena": "secret1"}}
    )


class RegisterRequest(BaseModel):
    """Registro"""

    nombre: Optional[str] = None
    email: Optional[str] = None
    contrasena: Optional[str] = None
    nombre_usuario: Optional[str] = Field(None, alias="nombreUsuario")
    rol: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "nombre": "Ana",
                "email": "ana@x.com",
                "contrasena": "secret1",
                "nombreUsuario": "ana123",
                "rol": "estudiante",
            }
        },
    )


class GoogleLoginRequest(BaseModel):
    """Login con access token de Google"""

    access_token: Optional[str] = Field(None, alias="accessToken")

    model_config = ConfigDict(populate_by_name=True)


class ChangePasswordRequest(BaseModel):
    """Cambio de contraseña"""

    contrasena_actual: Optional[str] = Field(None, alias="contrasenaActual")
    nueva_contrasena: Optional[str] = Field(None, alias="nuevaContrasena")

    model_config = ConfigDict(populate_by_name=True)


# ==================== Response Schemas ====================


class UserResponse(BaseModel):
    """Proyección de la propia cuenta (sin contrasena_hash)"""

    id: uuid.UUID
    nombre: str
    email: str
    nombre_usuario: str
    rol: str
    foto_perfil: Optional[str] = None
    portada: Optional[str] = None
    biografia: Optional[str] = None
    perfil_privado: bool = False
    fecha_creacion: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Respuesta de login y registro"""

    exito: bool = True
    mensaje: str
    usuario: UserResponse
    token: str


class MessageResponse(BaseModel):
    """Respuesta simple"""

    exito: bool = True
    mensaje: str


class TokenUserResponse(BaseModel):
    """Claims del token verificado"""

    id: uuid.UUID
    email: str
    nombre: Optional[str] = None
    rol: str
    expiracion: datetime


class VerifyTokenResponse(BaseModel):
    exito: bool = True
    usuario: TokenUserResponse
