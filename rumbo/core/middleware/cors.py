"""
CORS Middleware
Configuración de Cross-Origin Resource Sharing
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """
    Registra el middleware CORS

    Args:
        app: aplicación FastAPI
        settings: configuración activa
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods.split(","),
        allow_headers=settings.cors_allow_headers.split(",")
        if settings.cors_allow_headers != "*"
        else ["*"],
        expose_headers=["X-Request-ID"],
    )
