"""
Authentication Providers
"""

from .google_oauth import GoogleIdentityBridge, GoogleUserInfo

__all__ = ["GoogleIdentityBridge", "GoogleUserInfo"]
