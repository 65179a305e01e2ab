"""
Database Module
Configuración asíncrona de SQLAlchemy
"""

from .base import Base, JSONType, utcnow
from .guard import translate_db_errors
from .session import Database, get_db

__all__ = ["Base", "JSONType", "utcnow", "Database", "get_db", "translate_db_errors"]
