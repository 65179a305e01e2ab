"""
Authentication Dependencies
Dependencias de autenticación para FastAPI Depends
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..dependencies import get_token_issuer
from .exceptions import InvalidTokenException, MissingTokenException
from .token_issuer import TokenIssuer

# auto_error=False: la ausencia de token se responde con TOKEN_REQUERIDO
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Usuario autenticado de la petición"""

    id: uuid.UUID
    email: str
    nombre: Optional[str]
    rol: str
    expiracion: datetime


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> CurrentUser:
    """
    Verifica el token Bearer y devuelve el usuario de la petición

    Args:
        request: petición actual (se rellena request.state.usuario)
        credentials: cabecera Authorization Bearer
        token_issuer: emisor/verificador de tokens

    Returns:
        CurrentUser: claims verificados

    Raises:
        MissingTokenException: no hay token
        TokenExpiredException: token caducado
        InvalidTokenException: token inválido
    """
    if credentials is None or not credentials.credentials.strip():
        raise MissingTokenException()

    claims = token_issuer.verify(credentials.credentials.strip())

    try:
        user_id = uuid.UUID(claims.id)
    except ValueError:
        raise InvalidTokenException()

    current_user = CurrentUser(
        id=user_id,
        email=claims.email,
        nombre=claims.nombre,
        rol=claims.rol,
        expiracion=claims.expiracion,
    )
    request.state.usuario = current_user
    structlog.contextvars.bind_contextvars(usuario_id=str(user_id))
    return current_user
