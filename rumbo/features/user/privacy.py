"""
Privacy Gate
¿Puede el solicitante ver los datos de otro usuario?
"""

import uuid

from rumbo.domain.models.user import User
from ..auth.exceptions import UserNotFoundException
from ..auth.repository import UserRepository
from .exceptions import PrivateProfileException
from .repository import FollowRepository


class PrivacyGate:
    """
    Comprobación compartida por perfiles, tests y resultados vocacionales

    Permitido: el propio usuario, perfiles públicos y seguidores del perfil.
    """

    def __init__(self, user_repo: UserRepository, follow_repo: FollowRepository):
        self.user_repo = user_repo
        self.follow_repo = follow_repo

    async def ensure_can_view(self, target_id: uuid.UUID, requester_id: uuid.UUID) -> User:
        """
        Args:
            target_id: usuario cuyos datos se piden
            requester_id: usuario autenticado

        Returns:
            User: el usuario objetivo

        Raises:
            UserNotFoundException: el objetivo no existe
            PrivateProfileException: perfil privado y el solicitante no lo sigue
        """
        target = await self.user_repo.get(target_id)
        if target is None:
            raise UserNotFoundException()

        if target_id == requester_id or not target.perfil_privado:
            return target

        if await self.follow_repo.exists(requester_id, target_id):
            return target

        raise PrivateProfileException()
