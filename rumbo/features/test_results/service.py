"""
Test Results Service
Catálogo de tests, resultados, estadísticas y ranking
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import translate_db_errors
from ...core.logging import get_logger
from ..user.exceptions import NoDataToUpdateException, PrivateProfileException
from ..user.privacy import PrivacyGate
from .exceptions import (
    ResultNotFoundException,
    ResultNotOwnedException,
    TestDataRequiredException,
    TestNotFoundException,
)
from .models import TestResult, VocationalTest
from .repository import TestResultRepository, VocationalTestRepository
from .schemas import (
    RankingItem,
    SummaryOwner,
    SummaryPermissions,
    TestDistributionItem,
    TestResultResponse,
    TestStatsResponse,
    TestSummaryResponse,
    VocationalTestResponse,
)

logger = get_logger(__name__)

DEFAULT_RANKING_LIMIT = 10
MAX_RANKING_LIMIT = 100


class TestResultsService:
    """
    Servicio de resultados de tests

    Las lecturas de datos de otro usuario pasan por el PrivacyGate.
    """

    def __init__(
        self,
        test_repo: VocationalTestRepository,
        result_repo: TestResultRepository,
        privacy_gate: PrivacyGate,
        db: AsyncSession,
    ):
        self.test_repo = test_repo
        self.result_repo = result_repo
        self.privacy_gate = privacy_gate
        self.db = db

    @translate_db_errors
    async def list_available(self) -> List[VocationalTest]:
        """Tests activos ordenados por id"""
        return await self.test_repo.list_active()

    @translate_db_errors
    async def get_test(self, test_id: int) -> VocationalTest:
        test = await self.test_repo.get_active(test_id)
        if test is None:
            raise TestNotFoundException(test_id)
        return test

    @translate_db_errors
    async def list_results(
        self, target_id: uuid.UUID, requester_id: uuid.UUID
    ) -> List[TestResult]:
        """Resultados de `target_id`, más recientes primero"""
        await self.privacy_gate.ensure_can_view(target_id, requester_id)
        return await self.result_repo.list_by_user(target_id)

    @translate_db_errors
    async def save_result(
        self,
        user_id: uuid.UUID,
        test_id: Optional[int],
        puntuacion: Optional[float],
        areas: Any = None,
    ) -> TestResult:
        """
        Guarda un resultado

        Raises:
            TestDataRequiredException: falta test_id o puntuacion
            TestNotFoundException: test inexistente o inactivo
        """
        if test_id is None or puntuacion is None:
            raise TestDataRequiredException()

        if await self.test_repo.get_active(test_id) is None:
            raise TestNotFoundException(test_id)

        result = await self.result_repo.create(
            usuario_id=user_id,
            test_id=test_id,
            puntuacion=float(puntuacion),
            areas=areas,
        )
        await self.db.commit()
        logger.info("test_result_saved", usuario_id=str(user_id), test_id=test_id)
        return result

    @translate_db_errors
    async def update_result(
        self,
        result_id: uuid.UUID,
        user_id: uuid.UUID,
        puntuacion: Optional[float] = None,
        areas: Any = None,
    ) -> TestResult:
        """
        Modifica la puntuación o las áreas de un resultado propio

        Raises:
            NoDataToUpdateException: no llega ningún campo
            ResultNotFoundException: el resultado no existe
            ResultNotOwnedException: el resultado es de otro usuario
        """
        if puntuacion is None and areas is None:
            raise NoDataToUpdateException()

        result = await self.result_repo.get(result_id)
        if result is None:
            raise ResultNotFoundException()
        if result.usuario_id != user_id:
            raise ResultNotOwnedException()

        if puntuacion is not None:
            result.puntuacion = float(puntuacion)
        if areas is not None:
            result.areas = areas
        await self.db.commit()
        logger.info("test_result_updated", usuario_id=str(user_id), resultado_id=str(result_id))
        return result

    @translate_db_errors
    async def delete_result(self, result_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """Raises ResultNotFoundException si no existe o no es del usuario"""
        if not await self.result_repo.delete_owned(result_id, user_id):
            raise ResultNotFoundException()
        await self.db.commit()

    @translate_db_errors
    async def stats(self, target_id: uuid.UUID, requester_id: uuid.UUID) -> TestStatsResponse:
        """
        Estadísticas de tests de un usuario

        Returns:
            TestStatsResponse: total, promedio general, fecha del último y
            distribución por test
        """
        await self.privacy_gate.ensure_can_view(target_id, requester_id)

        total, promedio, ultimo = await self.result_repo.summary(target_id)
        rows = await self.result_repo.distribution(target_id)

        return TestStatsResponse(
            total_tests=total or 0,
            promedio_general=round(float(promedio), 2) if promedio is not None else 0.0,
            ultimo_test_fecha=ultimo,
            distribucion_tests=[
                TestDistributionItem(
                    test_id=test_id,
                    cantidad=cantidad,
                    promedio=round(float(avg or 0), 2),
                )
                for test_id, cantidad, avg in rows
            ],
        )

    @translate_db_errors
    async def ranking(self, test_id: int, limit: Optional[int] = None) -> List[RankingItem]:
        """
        Mejor puntuación por usuario en un test

        Args:
            test_id: test a clasificar
            limit: posiciones (por defecto 10, máximo 100)
        """
        if await self.test_repo.get_active(test_id) is None:
            raise TestNotFoundException(test_id)

        limit = limit or DEFAULT_RANKING_LIMIT
        limit = max(1, min(limit, MAX_RANKING_LIMIT))

        rows = await self.result_repo.ranking(test_id, limit)
        return [
            RankingItem(
                posicion=position,
                usuario_id=row.usuario_id,
                nombre_usuario=row.nombre_usuario,
                foto_perfil=row.foto_perfil,
                mejor_puntuacion=float(row.mejor_puntuacion),
                ultima_fecha=row.ultima_fecha,
            )
            for position, row in enumerate(rows, start=1)
        ]

    @translate_db_errors
    async def summary(
        self, target_id: uuid.UUID, requester_id: uuid.UUID
    ) -> TestSummaryResponse:
        """
        Resultados, estadísticas y catálogo en una sola respuesta

        Un perfil privado ajeno no produce 403: los datos llegan vacíos y
        `permisos` queda en False. Un usuario inexistente sigue siendo 404.
        """
        try:
            resultados = await self.list_results(target_id, requester_id)
            estadisticas = await self.stats(target_id, requester_id)
            permitido = True
        except PrivateProfileException:
            resultados = []
            estadisticas = TestStatsResponse(
                total_tests=0, promedio_general=0.0, distribucion_tests=[]
            )
            permitido = False

        tests = await self.list_available()

        return TestSummaryResponse(
            resultados=[TestResultResponse.model_validate(r) for r in resultados],
            estadisticas=estadisticas,
            tests_disponibles=[VocationalTestResponse.model_validate(t) for t in tests],
            usuario=SummaryOwner(id=target_id, es_propietario=target_id == requester_id),
            permisos=SummaryPermissions(ver_resultados=permitido, ver_estadisticas=permitido),
        )
