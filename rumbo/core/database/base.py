"""
Database Base Class
Clase base de todos los modelos ORM
"""

from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# JSONB en PostgreSQL, JSON genérico en el resto (SQLite en tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Instante actual en UTC sin tzinfo (columnas DateTime naive)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """
    SQLAlchemy Base Class

    Todos los modelos ORM heredan de esta clase
    """
    pass
