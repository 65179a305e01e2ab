"""
User Model
Modelo ORM de usuario (tabla usuarios)
"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rumbo.core.database.base import Base, utcnow


class User(Base):
    """
    Modelo de usuario

    Attributes:
        id: UUID del usuario (Primary Key)
        nombre: nombre visible
        email: email en minúsculas (Unique)
        nombre_usuario: nombre de usuario (Unique)
        contrasena_hash: SHA-256 hex o bcrypt heredado (Nullable: cuentas de Google)
        rol: rol normalizado
        foto_perfil: URL del avatar
        portada: URL de la imagen de portada
        biografia: texto libre
        perfil_privado: solo seguidores pueden ver los datos
        fecha_creacion: alta
        updated_at: última modificación
    """

    __tablename__ = "usuarios"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    nombre: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    nombre_usuario: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )

    contrasena_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    rol: Mapped[str] = mapped_column(String(50), default="user", nullable=False)

    foto_perfil: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    portada: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    biografia: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    perfil_privado: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, nombre_usuario={self.nombre_usuario})>"
