"""
Middleware Module
CORS y contexto de petición
"""

from .auth import RequestContextMiddleware
from .cors import setup_cors

__all__ = ["RequestContextMiddleware", "setup_cors"]
