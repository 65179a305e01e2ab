"""
User Schemas
Esquemas de perfil, búsqueda y seguimiento
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..auth.schemas import UserResponse


class UpdateProfileRequest(BaseModel):
    """Actualización parcial del perfil"""

    nombre: Optional[str] = Field(None, max_length=255)
    biografia: Optional[str] = None
    foto_perfil: Optional[str] = Field(None, description="URL del avatar")
    portada: Optional[str] = Field(None, description="URL de la portada")
    perfil_privado: Optional[bool] = None
    rol: Optional[str] = Field(None, validation_alias=AliasChoices("rol", "role"))

    model_config = ConfigDict(
        json_schema_extra={"example": {"biografia": "Estudiante de bachillerato", "perfil_privado": True}}
    )

    def changes(self) -> Dict[str, Any]:
        """Solo los campos enviados explícitamente"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PublicUserResponse(BaseModel):
    """Proyección pública (sin email)"""

    id: uuid.UUID
    nombre: str
    nombre_usuario: str
    rol: str
    foto_perfil: Optional[str] = None
    portada: Optional[str] = None
    biografia: Optional[str] = None
    perfil_privado: bool = False
    fecha_creacion: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PublicProfileResponse(PublicUserResponse):
    """Perfil de otro usuario con contadores de seguimiento"""

    siguiendo: bool = False
    seguidores: int = 0
    seguidos: int = 0


class UserStatsResponse(BaseModel):
    resultados_tests: int
    tests_completados: int
    resultados_vocacionales: int
    seguidores: int
    seguidos: int
    privacidad: bool


class UsernameAvailabilityResponse(BaseModel):
    exito: bool = True
    disponible: bool
    mensaje: str
    sugerencias: List[str] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    usuario: UserResponse
    estadisticas: UserStatsResponse
    ultimo_resultado_vocacional: Optional[Dict[str, Any]] = None


class UserListEnvelope(BaseModel):
    """Lista paginada de usuarios"""

    exito: bool = True
    datos: List[PublicUserResponse]
    pagina: int
    limite: int
    total: int
