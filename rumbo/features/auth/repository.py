"""
User Repository
Acceso a datos de usuarios
"""

from typing import Optional
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.domain.models.user import User
from rumbo.domain.repositories.base import AbstractRepository


class UserRepository(AbstractRepository[User]):
    """
    Repository de usuarios

    Lectura por ID de AbstractRepository más las búsquedas propias de autenticación
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_identifier(self, identifier: str) -> Optional[User]:
        """Primer usuario cuyo email o nombre de usuario coincide exactamente"""
        query = (
            select(User)
            .where(or_(User.email == identifier, User.nombre_usuario == identifier))
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Usuario por email sin distinguir mayúsculas (filas antiguas en mixto)"""
        query = (
            select(User)
            .where(func.lower(User.email) == email.lower())
            .order_by(User.fecha_creacion)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_conflict(self, email: str, nombre_usuario: str) -> Optional[User]:
        """Usuario que ya ocupa el email o el nombre de usuario"""
        query = (
            select(User)
            .where(or_(User.email == email, User.nombre_usuario == nombre_usuario))
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def exists_by_username(self, nombre_usuario: str) -> bool:
        """¿Existe el nombre de usuario?"""
        query = select(User.id).where(User.nombre_usuario == nombre_usuario)
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def save(self, user: User) -> User:
        """Inserta o actualiza un User"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
