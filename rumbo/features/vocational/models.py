"""
Vocational Result Model
Resultados del test vocacional (tabla user_vocational_results)
"""

import uuid
from datetime import datetime
from typing import Any, Optional
from sqlalchemy import DateTime, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rumbo.core.database.base import Base, JSONType, utcnow


class VocationalResult(Base):
    """
    Resultado vocacional

    Attributes:
        respuestas: respuestas del cuestionario (JSON)
        carreras: carreras recomendadas (JSON)
        promedio_general: promedio de puntuaciones
        zona_ikigai: zona ikigai resultante
    """
    __tablename__ = "user_vocational_results"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    usuario_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    fecha: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    respuestas: Mapped[Any] = mapped_column(JSONType, nullable=False)
    carreras: Mapped[Any] = mapped_column(JSONType, nullable=False)
    promedio_general: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    zona_ikigai: Mapped[str] = mapped_column(String(100), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<VocationalResult(id={self.id}, zona_ikigai={self.zona_ikigai})>"
