"""
Vocational Service
Historial, último resultado y estadísticas del test vocacional
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import translate_db_errors
from ...core.logging import get_logger
from ..user.privacy import PrivacyGate
from .exceptions import VocationalDataRequiredException, VocationalResultNotFoundException
from .models import VocationalResult
from .repository import VocationalResultRepository
from .schemas import VocationalStatsResponse, ZoneDistributionItem

logger = get_logger(__name__)


def percentage(part: int, total: int) -> int:
    """Porcentaje entero, redondeando .5 hacia arriba"""
    if total <= 0:
        return 0
    return int(part * 100 / total + 0.5)


class VocationalService:
    """Servicio de resultados vocacionales"""

    def __init__(
        self,
        result_repo: VocationalResultRepository,
        privacy_gate: PrivacyGate,
        db: AsyncSession,
    ):
        self.result_repo = result_repo
        self.privacy_gate = privacy_gate
        self.db = db

    @translate_db_errors
    async def history(
        self, target_id: uuid.UUID, requester_id: uuid.UUID
    ) -> List[VocationalResult]:
        await self.privacy_gate.ensure_can_view(target_id, requester_id)
        return await self.result_repo.list_by_user(target_id)

    @translate_db_errors
    async def latest(self, target_id: uuid.UUID, requester_id: uuid.UUID) -> VocationalResult:
        await self.privacy_gate.ensure_can_view(target_id, requester_id)
        result = await self.result_repo.latest_by_user(target_id)
        if result is None:
            raise VocationalResultNotFoundException()
        return result

    @translate_db_errors
    async def stats(
        self, target_id: uuid.UUID, requester_id: uuid.UUID
    ) -> VocationalStatsResponse:
        """
        Total, promedio (texto con dos decimales) y distribución por zona ikigai
        """
        await self.privacy_gate.ensure_can_view(target_id, requester_id)

        total = await self.result_repo.count_by_user(target_id)
        average = await self.result_repo.average_score(target_id)
        zones = await self.result_repo.zone_distribution(target_id)

        return VocationalStatsResponse(
            total_resultados=total,
            promedio_general=f"{float(average):.2f}" if average is not None else "0.00",
            distribucion_zonas=[
                ZoneDistributionItem(
                    zona_ikigai=zona,
                    cantidad=cantidad,
                    porcentaje=percentage(cantidad, total),
                )
                for zona, cantidad in zones
            ],
        )

    @translate_db_errors
    async def save(
        self,
        user_id: uuid.UUID,
        respuestas: Any,
        carreras: Any,
        promedio_general: Optional[float],
        zona_ikigai: Optional[str],
    ) -> VocationalResult:
        """
        Raises:
            VocationalDataRequiredException: falta respuestas, carreras o zona_ikigai
        """
        missing = [
            name
            for name, value in (
                ("respuestas", respuestas),
                ("carreras", carreras),
                ("zona_ikigai", (zona_ikigai or "").strip() or None),
            )
            if value is None
        ]
        if missing:
            raise VocationalDataRequiredException(missing)

        result = await self.result_repo.create(
            usuario_id=user_id,
            respuestas=respuestas,
            carreras=carreras,
            promedio_general=promedio_general,
            zona_ikigai=zona_ikigai.strip(),
        )
        await self.db.commit()
        logger.info("vocational_result_saved", usuario_id=str(user_id), zona_ikigai=result.zona_ikigai)
        return result

    @translate_db_errors
    async def delete(self, result_id: uuid.UUID, user_id: uuid.UUID) -> None:
        if not await self.result_repo.delete_owned(result_id, user_id):
            raise VocationalResultNotFoundException()
        await self.db.commit()
