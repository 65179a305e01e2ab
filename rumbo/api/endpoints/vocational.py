"""
Vocational API Endpoints
Resultados del test vocacional (/api/vocacional)
"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.api.endpoints.user import get_privacy_gate
from rumbo.core.auth import CurrentUser, get_current_user
from rumbo.core.database import get_db
from rumbo.core.exceptions import ErrorResponse
from rumbo.features.user.privacy import PrivacyGate
from rumbo.features.vocational.repository import VocationalResultRepository
from rumbo.features.vocational.schemas import (
    SaveVocationalResultRequest,
    VocationalResultResponse,
)
from rumbo.features.vocational.service import VocationalService

router = APIRouter()


def get_vocational_service(
    db: AsyncSession = Depends(get_db),
    privacy_gate: PrivacyGate = Depends(get_privacy_gate),
) -> VocationalService:
    return VocationalService(
        result_repo=VocationalResultRepository(db),
        privacy_gate=privacy_gate,
        db=db,
    )


def _history_envelope(results):
    datos = [VocationalResultResponse.model_validate(r) for r in results]
    return {"exito": True, "datos": datos, "total": len(datos)}


# ==================== Datos propios ====================


@router.get("/resultados")
async def get_my_history(
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    results = await service.history(current_user.id, current_user.id)
    return _history_envelope(results)


@router.get("/ultimo", responses={404: {"model": ErrorResponse}})
async def get_my_latest(
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    result = await service.latest(current_user.id, current_user.id)
    return {"exito": True, "datos": VocationalResultResponse.model_validate(result)}


@router.get("/estadisticas")
async def get_my_vocational_stats(
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    stats = await service.stats(current_user.id, current_user.id)
    return {"exito": True, "datos": stats}


# ==================== Datos de otro usuario ====================


@router.get("/historial/{usuario_id}", responses={403: {"model": ErrorResponse}})
async def get_history(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    """Historial completo, más reciente primero"""
    results = await service.history(usuario_id, current_user.id)
    return _history_envelope(results)


@router.get(
    "/ultimo/{usuario_id}",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_latest(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    result = await service.latest(usuario_id, current_user.id)
    return {"exito": True, "datos": VocationalResultResponse.model_validate(result)}


@router.get("/estadisticas/{usuario_id}", responses={403: {"model": ErrorResponse}})
async def get_stats(
    usuario_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    stats = await service.stats(usuario_id, current_user.id)
    return {"exito": True, "datos": stats}


# ==================== Escritura ====================


@router.post(
    "/resultado",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def save_result(
    request: SaveVocationalResultRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    """
    Guarda un resultado del cuestionario vocacional

    Args:
        request: respuestas, carreras, promedio_general y zona_ikigai
    """
    result = await service.save(
        current_user.id,
        request.respuestas,
        request.carreras,
        request.promedio_general,
        request.zona_ikigai,
    )
    return {
        "exito": True,
        "datos": VocationalResultResponse.model_validate(result),
        "mensaje": "Resultado vocacional guardado exitosamente",
    }


@router.delete("/resultado/{resultado_id}", responses={404: {"model": ErrorResponse}})
async def delete_result(
    resultado_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: VocationalService = Depends(get_vocational_service),
):
    await service.delete(resultado_id, current_user.id)
    return {"exito": True, "mensaje": "Resultado eliminado exitosamente"}
