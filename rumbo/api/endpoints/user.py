"""
User API Endpoints
Perfiles, búsqueda y seguimiento (/api/usuario)
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.core.auth import CurrentUser, get_current_user
from rumbo.core.database import get_db
from rumbo.core.exceptions import ErrorResponse
from rumbo.features.auth.repository import UserRepository
from rumbo.features.auth.schemas import UserResponse
from rumbo.features.test_results.repository import TestResultRepository
from rumbo.features.user.privacy import PrivacyGate
from rumbo.features.user.repository import FollowRepository, ProfileRepository
from rumbo.features.user.schemas import (
    DashboardResponse,
    PublicUserResponse,
    UpdateProfileRequest,
    UserListEnvelope,
    UsernameAvailabilityResponse,
)
from rumbo.features.user.service import DEFAULT_PAGE_SIZE, UserService, paginate
from rumbo.features.vocational.repository import VocationalResultRepository

router = APIRouter()


def get_privacy_gate(db: AsyncSession = Depends(get_db)) -> PrivacyGate:
    """PrivacyGate por petición (compartido con tests y vocacional)"""
    return PrivacyGate(UserRepository(db), FollowRepository(db))


def get_user_service(
    db: AsyncSession = Depends(get_db),
    privacy_gate: PrivacyGate = Depends(get_privacy_gate),
) -> UserService:
    """UserService por petición"""
    return UserService(
        user_repo=UserRepository(db),
        profile_repo=ProfileRepository(db),
        follow_repo=FollowRepository(db),
        test_result_repo=TestResultRepository(db),
        vocational_repo=VocationalResultRepository(db),
        privacy_gate=privacy_gate,
        db=db,
    )


def _user_list(users, pagina: int, limite: int) -> UserListEnvelope:
    pagina, limite, _ = paginate(pagina, limite)
    return UserListEnvelope(
        datos=[PublicUserResponse.model_validate(u) for u in users],
        pagina=pagina,
        limite=limite,
        total=len(users),
    )


# ==================== Perfil ====================


@router.get("/perfil")
async def get_my_profile(
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Perfil completo del usuario autenticado"""
    user = await user_service.get_own_profile(current_user.id)
    return {"exito": True, "usuario": UserResponse.model_validate(user)}


@router.put("/perfil", responses={400: {"model": ErrorResponse}})
async def update_my_profile(
    request: Optional[UpdateProfileRequest] = None,
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Actualización parcial del perfil"""
    changes = request.changes() if request is not None else {}
    user = await user_service.update_profile(current_user.id, changes)
    return {
        "exito": True,
        "usuario": UserResponse.model_validate(user),
        "mensaje": "Perfil actualizado exitosamente",
    }


@router.get(
    "/perfil/{usuario_id}",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_user_profile(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Perfil público de otro usuario"""
    profile = await user_service.get_profile(usuario_id, current_user.id)
    return {"exito": True, "usuario": profile, "mensaje": "Perfil obtenido exitosamente"}


@router.get("/dashboard")
async def get_dashboard(
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    data = await user_service.dashboard(current_user.id)
    return {
        "exito": True,
        "datos": DashboardResponse(
            usuario=UserResponse.model_validate(data["usuario"]),
            estadisticas=data["estadisticas"],
            ultimo_resultado_vocacional=data["ultimo_resultado_vocacional"],
        ),
    }


# ==================== Búsqueda ====================


@router.get("/buscar", response_model=UserListEnvelope)
async def search_users(
    q: Optional[str] = Query(None, description="Término de búsqueda (mín. 2 caracteres)"),
    pagina: int = Query(1, ge=1),
    limite: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    users = await user_service.search(q, current_user.id, pagina, limite)
    return _user_list(users, pagina, limite)


@router.get("/buscar-por-rol/{rol}", response_model=UserListEnvelope)
async def search_users_by_role(
    rol: str,
    pagina: int = Query(1, ge=1),
    limite: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    users = await user_service.search_by_role(rol, current_user.id, pagina, limite)
    return _user_list(users, pagina, limite)


@router.get("/verificar-username/{username}", response_model=UsernameAvailabilityResponse)
async def check_username(
    username: str,
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    result = await user_service.check_username(username)
    return UsernameAvailabilityResponse(**result)


# ==================== Estadísticas ====================


@router.get("/estadisticas")
async def get_my_stats(
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    stats = await user_service.stats(current_user.id, current_user.id)
    return {"exito": True, "datos": stats}


@router.get("/estadisticas/{usuario_id}")
async def get_user_stats(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    stats = await user_service.stats(usuario_id, current_user.id)
    return {"exito": True, "datos": stats}


# ==================== Seguimiento ====================


@router.post(
    "/seguir/{usuario_id}",
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def follow_user(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    await user_service.follow(current_user.id, usuario_id)
    return {"exito": True, "mensaje": "Ahora sigues a este usuario"}


@router.delete("/seguir/{usuario_id}", responses={404: {"model": ErrorResponse}})
async def unfollow_user(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    await user_service.unfollow(current_user.id, usuario_id)
    return {"exito": True, "mensaje": "Has dejado de seguir a este usuario"}


@router.get("/seguidores", response_model=UserListEnvelope)
async def get_my_followers(
    pagina: int = Query(1, ge=1),
    limite: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    users = await user_service.followers(current_user.id, current_user.id, pagina, limite)
    return _user_list(users, pagina, limite)


@router.get("/seguidores/{usuario_id}", response_model=UserListEnvelope)
async def get_user_followers(
    usuario_id: uuid.UUID,
    pagina: int = Query(1, ge=1),
    limite: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    users = await user_service.followers(usuario_id, current_user.id, pagina, limite)
    return _user_list(users, pagina, limite)


@router.get("/seguidos", response_model=UserListEnvelope)
async def get_my_following(
    pagina: int = Query(1, ge=1),
    limite: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    users = await user_service.following(current_user.id, current_user.id, pagina, limite)
    return _user_list(users, pagina, limite)


@router.get("/seguidos/{usuario_id}", response_model=UserListEnvelope)
async def get_user_following(
    usuario_id: uuid.UUID,
    pagina: int = Query(1, ge=1),
    limite: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    users = await user_service.following(usuario_id, current_user.id, pagina, limite)
    return _user_list(users, pagina, limite)


@router.get("/verificar-seguimiento/{usuario_id}")
async def check_following(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    sigue = await user_service.is_following(current_user.id, usuario_id)
    return {"exito": True, "sigue": sigue}
