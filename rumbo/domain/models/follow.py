"""
Follow Model
Relación de seguimiento entre usuarios (tabla seguidores)
"""

import uuid
from datetime import datetime
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rumbo.core.database.base import Base, utcnow


class Follow(Base):
    """
    seguidor_id sigue a seguido_id
    """

    __tablename__ = "seguidores"
    __table_args__ = (
        UniqueConstraint("seguidor_id", "seguido_id", name="uq_seguidores_par"),
        CheckConstraint("seguidor_id <> seguido_id", name="ck_seguidores_no_auto"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    seguidor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    seguido_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    fecha_creacion: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Follow(seguidor_id={self.seguidor_id}, seguido_id={self.seguido_id})>"
