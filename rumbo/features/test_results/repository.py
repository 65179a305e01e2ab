"""
Test Results Repository
Acceso a tests y resultados
"""

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.domain.models.user import User
from rumbo.domain.repositories.base import AbstractRepository
from .models import TestResult, VocationalTest


class VocationalTestRepository(AbstractRepository[VocationalTest]):
    """Catálogo de tests"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, VocationalTest)

    async def list_active(self) -> List[VocationalTest]:
        query = select(VocationalTest).where(VocationalTest.activo.is_(True)).order_by(VocationalTest.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_active(self, test_id: int) -> Optional[VocationalTest]:
        query = select(VocationalTest).where(
            VocationalTest.id == test_id,
            VocationalTest.activo.is_(True),
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()


class TestResultRepository(AbstractRepository[TestResult]):
    """Resultados de tests por usuario"""

    def __init__(self, db: AsyncSession):
        super().__init__(db, TestResult)

    async def list_by_user(self, user_id: uuid.UUID) -> List[TestResult]:
        """Resultados del usuario, más recientes primero"""
        query = (
            select(TestResult)
            .where(TestResult.usuario_id == user_id)
            .order_by(TestResult.fecha.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_by_user(self, user_id: uuid.UUID) -> int:
        query = select(func.count()).select_from(TestResult).where(TestResult.usuario_id == user_id)
        return (await self.session.execute(query)).scalar_one()

    async def count_distinct_tests(self, user_id: uuid.UUID) -> int:
        query = select(func.count(func.distinct(TestResult.test_id))).where(
            TestResult.usuario_id == user_id
        )
        return (await self.session.execute(query)).scalar_one()

    async def summary(self, user_id: uuid.UUID):
        """(total, promedio, fecha del último) de todos los resultados del usuario"""
        query = select(
            func.count(TestResult.id),
            func.avg(TestResult.puntuacion),
            func.max(TestResult.fecha),
        ).where(TestResult.usuario_id == user_id)
        return (await self.session.execute(query)).one()

    async def distribution(self, user_id: uuid.UUID) -> List[Tuple[int, int, float]]:
        """(test_id, cantidad, promedio) por test, más frecuente primero"""
        cantidad = func.count(TestResult.id).label("cantidad")
        query = (
            select(TestResult.test_id, cantidad, func.avg(TestResult.puntuacion))
            .where(TestResult.usuario_id == user_id)
            .group_by(TestResult.test_id)
            .order_by(cantidad.desc(), TestResult.test_id)
        )
        result = await self.session.execute(query)
        return [tuple(row) for row in result.all()]

    async def ranking(self, test_id: int, limit: int):
        """
        Mejor puntuación de cada usuario en un test, descendente

        Returns:
            filas (usuario_id, nombre_usuario, foto_perfil, mejor_puntuacion, ultima_fecha)
        """
        best = (
            select(
                TestResult.usuario_id.label("usuario_id"),
                func.max(TestResult.puntuacion).label("mejor_puntuacion"),
                func.max(TestResult.fecha).label("ultima_fecha"),
            )
            .where(TestResult.test_id == test_id)
            .group_by(TestResult.usuario_id)
            .subquery()
        )
        query = (
            select(
                best.c.usuario_id,
                User.nombre_usuario,
                User.foto_perfil,
                best.c.mejor_puntuacion,
                best.c.ultima_fecha,
            )
            .join(User, User.id == best.c.usuario_id)
            .order_by(best.c.mejor_puntuacion.desc(), User.nombre_usuario)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.all()

    async def delete_owned(self, result_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Elimina un resultado del usuario; False si no existe o es ajeno"""
        result = await self.session.execute(
            delete(TestResult).where(
                TestResult.id == result_id,
                TestResult.usuario_id == user_id,
            )
        )
        return result.rowcount > 0
