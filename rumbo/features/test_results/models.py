"""
Test Domain Models
Catálogo de tests y resultados por usuario
"""

import uuid
from datetime import datetime
from typing import Any, Optional
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rumbo.core.database.base import Base, JSONType, utcnow


class VocationalTest(Base):
    """
    Test disponible (tabla tests_vocacionales)
    """
    __tablename__ = "tests_vocacionales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    descripcion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Minutos estimados
    duracion: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    preguntas_total: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    activo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<VocationalTest(id={self.id}, nombre={self.nombre})>"


class TestResult(Base):
    """
    Resultado de un test (tabla user_test_results)
    """
    __tablename__ = "user_test_results"
    __table_args__ = (
        Index("ix_user_test_results_test_puntuacion", "test_id", "puntuacion"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    usuario_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    test_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tests_vocacionales.id"),
        nullable=False,
    )

    puntuacion: Mapped[float] = mapped_column(Float, nullable=False)
    # Puntuación por área, p. ej. {"ciencias": 80, "artes": 40}
    areas: Mapped[Optional[Any]] = mapped_column(JSONType, nullable=True)
    fecha: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<TestResult(id={self.id}, test_id={self.test_id}, puntuacion={self.puntuacion})>"
