"""
Database Session Management
Motor asíncrono de SQLAlchemy y sesiones por petición
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config import Settings
from ..logging import get_logger
from ..utils.retry import retry_with_backoff
from .base import Base

logger = get_logger(__name__)


def _engine_options(settings: Settings) -> dict:
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        # Base en memoria compartida por todas las sesiones (tests)
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }

    options = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_connect_timeout,
    }
    if url.get_driver_name() == "asyncpg":
        options["connect_args"] = {
            "timeout": settings.db_connect_timeout,
            "command_timeout": settings.db_query_timeout,
        }
    return options


class Database:
    """
    Motor y fábrica de sesiones

    Se crea una vez en `create_app` y se cierra en el shutdown.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            echo=settings.db_echo,
            **_engine_options(settings),
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Crea las tablas que falten (solo desarrollo y tests)"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """SELECT 1 contra la base de datos"""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def wait_until_ready(self) -> None:
        """
        Comprobación de conectividad al arrancar, con backoff exponencial

        Raises:
            RuntimeError: la base de datos no respondió tras todos los intentos
        """
        await retry_with_backoff(
            self.ping,
            max_attempts=max(1, self.settings.db_startup_retries),
            base_delay=self.settings.db_startup_retry_delay,
            operation="Database connectivity check",
        )
        logger.info("database_ready", backend=self.engine.url.get_backend_name())

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI: una sesión por petición

    Commit al terminar, rollback ante cualquier excepción, cierre siempre.

    Yields:
        AsyncSession: sesión asíncrona
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
