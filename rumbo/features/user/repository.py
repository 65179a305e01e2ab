"""
Profile & Follow Repositories
Consultas de perfiles y del grafo de seguimiento
"""

import uuid
from typing import List, Optional, Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.domain.models.follow import Follow
from rumbo.domain.models.user import User
from rumbo.domain.repositories.base import AbstractRepository


class ProfileRepository(AbstractRepository[User]):
    """Lecturas de perfiles"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def search(
        self, term: str, exclude_id: uuid.UUID, skip: int, limit: int
    ) -> List[User]:
        """Coincidencia parcial sin distinguir mayúsculas en nombre o nombre de usuario"""
        pattern = f"%{term.lower()}%"
        query = (
            select(User)
            .where(
                or_(
                    func.lower(User.nombre).like(pattern),
                    func.lower(User.nombre_usuario).like(pattern),
                ),
                User.id != exclude_id,
            )
            .order_by(User.nombre_usuario)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_by_role(
        self, rol: str, exclude_id: uuid.UUID, skip: int, limit: int
    ) -> List[User]:
        query = (
            select(User)
            .where(User.rol == rol, User.id != exclude_id)
            .order_by(User.nombre_usuario)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def taken_usernames(self, candidates: Sequence[str]) -> set:
        """Subconjunto de `candidates` que ya está en uso"""
        if not candidates:
            return set()
        query = select(User.nombre_usuario).where(User.nombre_usuario.in_(list(candidates)))
        result = await self.session.execute(query)
        return set(result.scalars().all())


class FollowRepository:
    """
    Repository de la tabla seguidores

    Sin AbstractRepository: la clave natural es el par (seguidor, seguido)
    """

    def __init__(self, db: AsyncSession):
        self.session = db

    async def get(self, seguidor_id: uuid.UUID, seguido_id: uuid.UUID) -> Optional[Follow]:
        query = select(Follow).where(
            Follow.seguidor_id == seguidor_id,
            Follow.seguido_id == seguido_id,
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, seguidor_id: uuid.UUID, seguido_id: uuid.UUID) -> bool:
        return await self.get(seguidor_id, seguido_id) is not None

    async def create(self, seguidor_id: uuid.UUID, seguido_id: uuid.UUID) -> Follow:
        follow = Follow(seguidor_id=seguidor_id, seguido_id=seguido_id)
        self.session.add(follow)
        await self.session.flush()
        return follow

    async def remove(self, seguidor_id: uuid.UUID, seguido_id: uuid.UUID) -> bool:
        """Elimina la relación; False si no existía"""
        result = await self.session.execute(
            delete(Follow).where(
                Follow.seguidor_id == seguidor_id,
                Follow.seguido_id == seguido_id,
            )
        )
        return result.rowcount > 0

    async def count_followers(self, user_id: uuid.UUID) -> int:
        query = select(func.count()).select_from(Follow).where(Follow.seguido_id == user_id)
        return (await self.session.execute(query)).scalar_one()

    async def count_following(self, user_id: uuid.UUID) -> int:
        query = select(func.count()).select_from(Follow).where(Follow.seguidor_id == user_id)
        return (await self.session.execute(query)).scalar_one()

    async def list_followers(self, user_id: uuid.UUID, skip: int, limit: int) -> List[User]:
        """Usuarios que siguen a `user_id`, más recientes primero"""
        query = (
            select(User)
            .join(Follow, Follow.seguidor_id == User.id)
            .where(Follow.seguido_id == user_id)
            .order_by(Follow.fecha_creacion.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_following(self, user_id: uuid.UUID, skip: int, limit: int) -> List[User]:
        """Usuarios a los que sigue `user_id`, más recientes primero"""
        query = (
            select(User)
            .join(Follow, Follow.seguido_id == User.id)
            .where(Follow.seguidor_id == user_id)
            .order_by(Follow.fecha_creacion.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
