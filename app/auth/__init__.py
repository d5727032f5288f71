"""
Authentication module.
"""

from app.auth.session import ShopSession, ShopSessionManager, SESSION_COOKIE_NAME

__all__ = [
    "ShopSession",
    "ShopSessionManager",
    "SESSION_COOKIE_NAME",
]
