"""
User Service
Perfiles, búsqueda, estadísticas y seguimiento
"""

import uuid
from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.auth.roles import normalize_role
from ...core.database import translate_db_errors, utcnow
from ...core.logging import get_logger
from ...domain.models.user import User
from ..auth.exceptions import UserNotFoundException, UsernameTooShortException
from ..auth.repository import UserRepository
from ..test_results.repository import TestResultRepository
from ..vocational.repository import VocationalResultRepository
from ..vocational.schemas import VocationalResultResponse
from .exceptions import (
    AlreadyFollowingException,
    NoDataToUpdateException,
    NotFollowingException,
    SearchTermTooShortException,
    SelfFollowException,
)
from .privacy import PrivacyGate
from .repository import FollowRepository, ProfileRepository
from .schemas import PublicProfileResponse, UserStatsResponse

logger = get_logger(__name__)

MIN_SEARCH_LENGTH = 2
MIN_USERNAME_LENGTH = 3
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50
SUGGESTION_COUNT = 3
SUGGESTION_CANDIDATES = 20

UPDATABLE_FIELDS = ("nombre", "biografia", "foto_perfil", "portada", "perfil_privado", "rol")


def paginate(page: int, limit: int) -> Tuple[int, int, int]:
    """(pagina, limite, offset) con pagina >= 1 y limite en 1..50"""
    page = max(1, page or 1)
    limit = max(1, min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE))
    return page, limit, (page - 1) * limit


class UserService:
    """
    Servicio de usuario

    DI Pattern: repositories y PrivacyGate llegan por el constructor.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
        follow_repo: FollowRepository,
        test_result_repo: TestResultRepository,
        vocational_repo: VocationalResultRepository,
        privacy_gate: PrivacyGate,
        db: AsyncSession,
    ):
        self.user_repo = user_repo
        self.profile_repo = profile_repo
        self.follow_repo = follow_repo
        self.test_result_repo = test_result_repo
        self.vocational_repo = vocational_repo
        self.privacy_gate = privacy_gate
        self.db = db

    async def _require_user(self, user_id: uuid.UUID) -> User:
        user = await self.user_repo.get(user_id)
        if user is None:
            raise UserNotFoundException()
        return user

    # ==================== Perfil ====================

    @translate_db_errors
    async def get_own_profile(self, user_id: uuid.UUID) -> User:
        """Perfil completo del usuario autenticado"""
        return await self._require_user(user_id)

    @translate_db_errors
    async def get_profile(
        self, target_id: uuid.UUID, requester_id: uuid.UUID
    ) -> PublicProfileResponse:
        """
        Perfil público de otro usuario

        Raises:
            UserNotFoundException: no existe
            PrivateProfileException: perfil privado y no lo sigue
        """
        target = await self.privacy_gate.ensure_can_view(target_id, requester_id)
        profile = PublicProfileResponse.model_validate(target)
        profile.siguiendo = (
            target_id != requester_id
            and await self.follow_repo.exists(requester_id, target_id)
        )
        profile.seguidores = await self.follow_repo.count_followers(target_id)
        profile.seguidos = await self.follow_repo.count_following(target_id)
        return profile

    @translate_db_errors
    async def update_profile(self, user_id: uuid.UUID, data: Dict[str, Any]) -> User:
        """
        Actualización parcial

        Args:
            user_id: usuario autenticado
            data: campos enviados (solo se aplican los permitidos)

        Raises:
            NoDataToUpdateException: ningún campo aplicable
            InvalidRoleException: rol no permitido
        """
        changes = {
            key: value
            for key, value in data.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if "nombre" in changes:
            changes["nombre"] = changes["nombre"].strip()
            if not changes["nombre"]:
                del changes["nombre"]
        if "rol" in changes:
            changes["rol"] = normalize_role(changes["rol"])
        if not changes:
            raise NoDataToUpdateException()

        user = await self._require_user(user_id)
        for key, value in changes.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        await self.db.commit()

        logger.info("profile_updated", usuario_id=str(user_id), campos=sorted(changes))
        return user

    @translate_db_errors
    async def stats(self, target_id: uuid.UUID, requester_id: uuid.UUID) -> UserStatsResponse:
        """Contadores del usuario (protegidos por el PrivacyGate)"""
        target = await self.privacy_gate.ensure_can_view(target_id, requester_id)
        return await self._stats_for(target)

    async def _stats_for(self, user: User) -> UserStatsResponse:
        return UserStatsResponse(
            resultados_tests=await self.test_result_repo.count_by_user(user.id),
            tests_completados=await self.test_result_repo.count_distinct_tests(user.id),
            resultados_vocacionales=await self.vocational_repo.count_by_user(user.id),
            seguidores=await self.follow_repo.count_followers(user.id),
            seguidos=await self.follow_repo.count_following(user.id),
            privacidad=user.perfil_privado,
        )

    @translate_db_errors
    async def dashboard(self, user_id: uuid.UUID) -> Dict[str, Any]:
        """Perfil propio, contadores y último resultado vocacional"""
        user = await self._require_user(user_id)
        latest = await self.vocational_repo.latest_by_user(user_id)
        return {
            "usuario": user,
            "estadisticas": await self._stats_for(user),
            "ultimo_resultado_vocacional": (
                VocationalResultResponse.model_validate(latest).model_dump(mode="json")
                if latest is not None
                else None
            ),
        }

    # ==================== Búsqueda ====================

    @translate_db_errors
    async def search(
        self, q: str, requester_id: uuid.UUID, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> List[User]:
        """
        Búsqueda por nombre o nombre de usuario, sin el propio solicitante

        Raises:
            SearchTermTooShortException: término < 2 caracteres
        """
        term = (q or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            raise SearchTermTooShortException(MIN_SEARCH_LENGTH)
        _, limit, offset = paginate(page, limit)
        return await self.profile_repo.search(term, requester_id, offset, limit)

    @translate_db_errors
    async def search_by_role(
        self, rol: str, requester_id: uuid.UUID, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> List[User]:
        rol = normalize_role(rol)
        _, limit, offset = paginate(page, limit)
        return await self.profile_repo.list_by_role(rol, requester_id, offset, limit)

    @translate_db_errors
    async def check_username(self, username: str) -> Dict[str, Any]:
        """
        Disponibilidad de un nombre de usuario

        Returns:
            dict: disponible, mensaje y hasta tres sugerencias libres
        """
        username = (username or "").strip()
        if len(username) < MIN_USERNAME_LENGTH:
            raise UsernameTooShortException(MIN_USERNAME_LENGTH)

        if not await self.user_repo.exists_by_username(username):
            return {
                "disponible": True,
                "mensaje": "Nombre de usuario disponible",
                "sugerencias": [],
            }

        candidates = [f"{username}{n}" for n in range(1, SUGGESTION_CANDIDATES + 1)]
        taken = await self.profile_repo.taken_usernames(candidates)
        suggestions = [c for c in candidates if c not in taken][:SUGGESTION_COUNT]
        return {
            "disponible": False,
            "mensaje": "El nombre de usuario ya está en uso",
            "sugerencias": suggestions,
        }

    # ==================== Seguimiento ====================

    @translate_db_errors
    async def follow(self, follower_id: uuid.UUID, followed_id: uuid.UUID) -> None:
        """
        Raises:
            SelfFollowException: seguirse a sí mismo
            UserNotFoundException: el usuario a seguir no existe
            AlreadyFollowingException: ya lo sigue
        """
        if follower_id == followed_id:
            raise SelfFollowException()
        await self._require_user(followed_id)
        if await self.follow_repo.exists(follower_id, followed_id):
            raise AlreadyFollowingException()

        try:
            await self.follow_repo.create(follower_id, followed_id)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise AlreadyFollowingException()

        logger.info("user_followed", seguidor_id=str(follower_id), seguido_id=str(followed_id))

    @translate_db_errors
    async def unfollow(self, follower_id: uuid.UUID, followed_id: uuid.UUID) -> None:
        """Raises NotFollowingException si no lo seguía"""
        if not await self.follow_repo.remove(follower_id, followed_id):
            raise NotFollowingException()
        await self.db.commit()

    @translate_db_errors
    async def followers(
        self,
        target_id: uuid.UUID,
        requester_id: uuid.UUID,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> List[User]:
        await self.privacy_gate.ensure_can_view(target_id, requester_id)
        _, limit, offset = paginate(page, limit)
        return await self.follow_repo.list_followers(target_id, offset, limit)

    @translate_db_errors
    async def following(
        self,
        target_id: uuid.UUID,
        requester_id: uuid.UUID,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> List[User]:
        await self.privacy_gate.ensure_can_view(target_id, requester_id)
        _, limit, offset = paginate(page, limit)
        return await self.follow_repo.list_following(target_id, offset, limit)

    @translate_db_errors
    async def is_following(self, follower_id: uuid.UUID, followed_id: uuid.UUID) -> bool:
        return await self.follow_repo.exists(follower_id, followed_id)
