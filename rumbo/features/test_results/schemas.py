"""
Test Results Schemas
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rumbo.core.utils.jsonfields import decode_json_text


class SaveTestResultRequest(BaseModel):
    """Resultado de test enviado por el cliente"""

    test_id: Optional[int] = Field(None, alias="testId")
    puntuacion: Optional[float] = None
    areas: Optional[Any] = Field(None, description="Puntuación por área (JSON libre)")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"testId": 1, "puntuacion": 87.5, "areas": {"ciencias": 90, "artes": 60}}
        },
    )


class UpdateTestResultRequest(BaseModel):
    """Campos modificables de un resultado propio"""

    puntuacion: Optional[float] = None
    areas: Optional[Any] = None


class VocationalTestResponse(BaseModel):
    id: int
    nombre: str
    descripcion: Optional[str] = None
    duracion: Optional[int] = None
    preguntas_total: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class TestResultResponse(BaseModel):
    id: uuid.UUID
    usuario_id: uuid.UUID
    test_id: int
    puntuacion: float
    areas: Optional[Any] = None
    fecha: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("areas", mode="before")
    @classmethod
    def decode_areas(cls, v):
        """Los JSON guardados como texto se devuelven decodificados"""
        return decode_json_text(v)


class TestDistributionItem(BaseModel):
    test_id: int
    cantidad: int
    promedio: float


class TestStatsResponse(BaseModel):
    total_tests: int
    promedio_general: float
    ultimo_test_fecha: Optional[datetime] = None
    distribucion_tests: List[TestDistributionItem]


class RankingItem(BaseModel):
    posicion: int
    usuario_id: uuid.UUID
    nombre_usuario: str
    foto_perfil: Optional[str] = None
    mejor_puntuacion: float
    ultima_fecha: Optional[datetime] = None


class SummaryOwner(BaseModel):
    id: uuid.UUID
    es_propietario: bool


class SummaryPermissions(BaseModel):
    ver_resultados: bool
    ver_estadisticas: bool


class TestSummaryResponse(BaseModel):
    """
    Resumen de tests de un usuario

    Con un perfil privado ajeno los resultados llegan vacíos y `permisos`
    lo indica, en lugar de responder 403.
    """

    resultados: List[TestResultResponse]
    estadisticas: TestStatsResponse
    tests_disponibles: List[VocationalTestResponse]
    usuario: SummaryOwner
    permisos: SummaryPermissions
