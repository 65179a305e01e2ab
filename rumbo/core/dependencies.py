"""
Core Dependencies
Dependencias compartidas (objetos creados en create_app)
"""

from fastapi import Request

from .auth.providers.google_oauth import GoogleIdentityBridge
from .auth.token_issuer import TokenIssuer
from .config import Settings


def get_app_settings(request: Request) -> Settings:
    """Configuración activa de la aplicación"""
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    """Emisor de tokens de sesión"""
    return request.app.state.token_issuer


def get_identity_bridge(request: Request) -> GoogleIdentityBridge:
    """Cliente de identidad de Google"""
    return request.app.state.identity_bridge
