"""
Authentication Module
Tokens de sesión, hashes de contraseña e identidad de Google
"""

from .token_issuer import TokenClaims, TokenIssuer
from .dependencies import CurrentUser, get_current_user

__all__ = [
    "TokenClaims",
    "TokenIssuer",
    "CurrentUser",
    "get_current_user",
]
