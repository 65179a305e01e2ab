"""
Auth API Endpoints
Rutas de autenticación (/api/auth)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.core.auth import CurrentUser, get_current_user
from rumbo.core.auth.providers.google_oauth import GoogleIdentityBridge
from rumbo.core.auth.token_issuer import TokenIssuer
from rumbo.core.config import Settings
from rumbo.core.database import get_db
from rumbo.core.dependencies import get_app_settings, get_identity_bridge, get_token_issuer
from rumbo.core.exceptions import ErrorResponse
from rumbo.features.auth.repository import UserRepository
from rumbo.features.auth.schemas import (
    AuthResponse,
    ChangePasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenUserResponse,
    UserResponse,
    VerifyTokenResponse,
)
from rumbo.features.auth.service import AuthService

router = APIRouter()


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    identity_bridge: GoogleIdentityBridge = Depends(get_identity_bridge),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    """AuthService por petición"""
    return AuthService(
        user_repo=UserRepository(db),
        token_issuer=token_issuer,
        identity_bridge=identity_bridge,
        db=db,
        default_avatar_url=settings.default_avatar_url,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Credenciales incompletas"},
        401: {"model": ErrorResponse, "description": "Contraseña incorrecta"},
        404: {"model": ErrorResponse, "description": "Usuario no encontrado"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Login con email o nombre de usuario

    Args:
        request: identificador y contraseña
        auth_service: servicio de autenticación

    Returns:
        AuthResponse: usuario (sin hash) y token
    """
    user, token = await auth_service.authenticate_with_password(
        request.identificador, request.contrasena
    )
    return AuthResponse(
        mensaje="Inicio de sesión exitoso",
        usuario=UserResponse.model_validate(user),
        token=token,
    )


@router.post(
    "/registro",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Datos inválidos"},
        409: {"model": ErrorResponse, "description": "Email o nombre de usuario en uso"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Registro de una cuenta nueva"""
    user, token = await auth_service.register(
        nombre=request.nombre,
        email=request.email,
        contrasena=request.contrasena,
        nombre_usuario=request.nombre_usuario,
        rol=request.rol,
    )
    return AuthResponse(
        mensaje="Usuario registrado exitosamente",
        usuario=UserResponse.model_validate(user),
        token=token,
    )


@router.post(
    "/google",
    response_model=AuthResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Token de Google inválido"},
        502: {"model": ErrorResponse, "description": "Error de red"},
        504: {"model": ErrorResponse, "description": "Google no respondió"},
    },
)
async def google_login(
    request: GoogleLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login con access token de Google"""
    user, token = await auth_service.authenticate_with_identity_bridge(request.access_token)
    return AuthResponse(
        mensaje="Inicio de sesión con Google exitoso",
        usuario=UserResponse.model_validate(user),
        token=token,
    )


@router.put("/password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Cambio de contraseña"""
    await auth_service.change_password(
        current_user.id, request.contrasena_actual, request.nueva_contrasena
    )
    return MessageResponse(mensaje="Contraseña actualizada exitosamente")


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: CurrentUser = Depends(get_current_user)):
    """
    Cierre de sesión

    Los tokens no tienen estado en el servidor: el cliente descarta el suyo.
    """
    return MessageResponse(mensaje="Sesión cerrada exitosamente")


@router.get("/verificar", response_model=VerifyTokenResponse)
async def verify_token(current_user: CurrentUser = Depends(get_current_user)):
    """Devuelve los datos del token verificado"""
    return VerifyTokenResponse(
        usuario=TokenUserResponse(
            id=current_user.id,
            email=current_user.email,
            nombre=current_user.nombre,
            rol=current_user.rol,
            expiracion=current_user.expiracion,
        )
    )
