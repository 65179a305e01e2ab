"""
Vocational Schemas
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from rumbo.core.utils.jsonfields import decode_json_text


class SaveVocationalResultRequest(BaseModel):
    """Resultado del cuestionario vocacional"""

    respuestas: Optional[Any] = None
    carreras: Optional[Any] = None
    promedio_general: Optional[float] = None
    zona_ikigai: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "respuestas": {"p1": 4, "p2": 5},
                "carreras": ["Ingeniería de Software", "Diseño UX"],
                "promedio_general": 4.2,
                "zona_ikigai": "pasion",
            }
        }
    )


class VocationalResultResponse(BaseModel):
    id: uuid.UUID
    usuario_id: uuid.UUID
    fecha: datetime
    respuestas: Any
    carreras: Any
    promedio_general: Optional[float] = None
    zona_ikigai: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("respuestas", "carreras", mode="before")
    @classmethod
    def decode_json(cls, v):
        """Los JSON guardados como texto se devuelven decodificados"""
        return decode_json_text(v)


class ZoneDistributionItem(BaseModel):
    zona_ikigai: str
    cantidad: int
    porcentaje: int


class VocationalStatsResponse(BaseModel):
    total_resultados: int
    # Dos decimales como texto ("0.00" sin resultados)
    promedio_general: str
    distribucion_zonas: List[ZoneDistributionItem]
