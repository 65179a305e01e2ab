"""
Rumbo Backend - Main Application
Servicio FastAPI de orientación vocacional
"""

from contextlib import asynccontextmanager
from typing import Optional

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from rumbo.api.router import api_router
from rumbo.core.auth.providers.google_oauth import GoogleIdentityBridge
from rumbo.core.auth.token_issuer import TokenIssuer
from rumbo.core.config import Settings, get_settings
from rumbo.core.database import Database
from rumbo.core.exceptions.handlers import register_exception_handlers
from rumbo.core.logging import configure_logging, get_logger
from rumbo.core.middleware import RequestContextMiddleware, setup_cors

# Modelos registrados en Base.metadata antes de create_all
from rumbo.domain.models import follow, user  # noqa: F401
from rumbo.features.test_results import models as test_models  # noqa: F401
from rumbo.features.vocational import models as vocational_models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ciclo de vida de la aplicación

    Startup:
        - Comprobación de conectividad con la base de datos (con reintentos)
        - Creación de tablas (solo desarrollo)

    Shutdown:
        - Cierre del pool de conexiones
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    logger.info(
        "application_starting",
        service=settings.app_title,
        version=settings.app_version,
        environment=settings.app_env,
        debug=settings.debug,
    )

    if not settings.jwt_secret_key:
        logger.warning("jwt_secret_missing")

    try:
        await database.wait_until_ready()
        if settings.app_env == "dev":
            await database.create_all()
            logger.info("database_tables_created")
    except RuntimeError as e:
        logger.error("database_unavailable_at_startup", error=str(e))

    yield

    await database.dispose()
    logger.info("application_stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construye la aplicación

    Args:
        settings: configuración explícita (por defecto, la del entorno)

    Returns:
        FastAPI: aplicación con middlewares, handlers y rutas registrados
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_title,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.token_issuer = TokenIssuer(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.jwt_expire_days,
    )
    app.state.identity_bridge = GoogleIdentityBridge(
        userinfo_url=settings.google_userinfo_url,
        timeout=settings.google_timeout,
    )

    # Middlewares: el último registrado es el más externo
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    setup_cors(app, settings)

    register_exception_handlers(app)

    def custom_openapi():
        """Añade el esquema Bearer (JWT) a OpenAPI"""
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.app_title,
            version=settings.app_version,
            description=settings.app_description,
            routes=app.routes,
        )
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Token de sesión (Authorization: Bearer <token>)",
            }
        }
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    app.include_router(api_router, prefix=settings.api_prefix)

    # ==================== Health Check ====================

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Estado del servicio

        Returns:
            dict: estado, versión y entorno
        """
        return {
            "status": "ok",
            "service": settings.app_title,
            "version": settings.app_version,
            "environment": settings.app_env,
        }

    @app.head("/health", tags=["Health"])
    async def health_check_head():
        return JSONResponse(content={"status": "ok"})

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "exito": True,
            "mensaje": "API de Rumbo funcionando",
            "service": settings.app_title,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs" if settings.debug else None,
        }

    return app


app = create_app()
