"""
Vocational Result Repository
"""

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.domain.repositories.base import AbstractRepository
from .models import VocationalResult


class VocationalResultRepository(AbstractRepository[VocationalResult]):
    """Resultados vocacionales por usuario"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, VocationalResult)

    async def list_by_user(self, user_id: uuid.UUID) -> List[VocationalResult]:
        """Más recientes primero"""
        query = (
            select(VocationalResult)
            .where(VocationalResult.usuario_id == user_id)
            .order_by(VocationalResult.fecha.desc(), VocationalResult.created_at.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def latest_by_user(self, user_id: uuid.UUID) -> Optional[VocationalResult]:
        query = (
            select(VocationalResult)
            .where(VocationalResult.usuario_id == user_id)
            .order_by(VocationalResult.fecha.desc(), VocationalResult.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def count_by_user(self, user_id: uuid.UUID) -> int:
        query = select(func.count()).select_from(VocationalResult).where(
            VocationalResult.usuario_id == user_id
        )
        return (await self.session.execute(query)).scalar_one()

    async def average_score(self, user_id: uuid.UUID) -> Optional[float]:
        query = select(func.avg(VocationalResult.promedio_general)).where(
            VocationalResult.usuario_id == user_id
        )
        return (await self.session.execute(query)).scalar_one()

    async def zone_distribution(self, user_id: uuid.UUID) -> List[Tuple[str, int]]:
        """(zona_ikigai, cantidad), más frecuente primero"""
        cantidad = func.count(VocationalResult.id).label("cantidad")
        query = (
            select(VocationalResult.zona_ikigai, cantidad)
            .where(VocationalResult.usuario_id == user_id)
            .group_by(VocationalResult.zona_ikigai)
            .order_by(cantidad.desc(), VocationalResult.zona_ikigai)
        )
        result = await self.session.execute(query)
        return [tuple(row) for row in result.all()]

    async def delete_owned(self, result_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            delete(VocationalResult).where(
                VocationalResult.id == result_id,
                VocationalResult.usuario_id == user_id,
            )
        )
        return result.rowcount > 0
