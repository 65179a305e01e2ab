"""
Error Response Schemas
Esquemas de respuesta de error
"""

from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Detalle de un error de validación"""

    campo: Optional[str] = Field(None, description="Campo con error")
    mensaje: str = Field(..., description="Mensaje de error")
    tipo: Optional[str] = Field(None, description="Tipo de error de pydantic")


class ErrorResponse(BaseModel):
    """
    Respuesta de error estándar

    Todas las respuestas de error de la API tienen esta forma.
    """

    exito: bool = Field(default=False, description="Siempre false")
    error: str = Field(..., description="Mensaje legible")
    codigo: str = Field(..., description="Código de error estable")
    request_id: Optional[str] = Field(None, description="ID de correlación de la petición")
    path: Optional[str] = Field(None, description="Ruta solicitada")
    detalles: Optional[Dict[str, Any]] = Field(None, description="Información adicional")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "exito": False,
                "error": "Contraseña incorrecta",
                "codigo": "CONTRASENA_INCORRECTA",
                "request_id": "5b0c2f0e8a3c4d0f9d5e7a1b2c3d4e5f",
                "path": "/api/auth/login",
                "detalles": None,
            }
        }
    )


class ValidationErrorResponse(ErrorResponse):
    """Respuesta de error de validación (422)"""

    errores: List[ErrorDetail] = Field(default_factory=list, description="Lista de errores")
