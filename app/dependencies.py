"""
FastAPI dependency injection.
Shop session resolution and Shopify client construction.
"""

from typing import Callable, Optional
from fastapi import Request

from .config import settings
from .auth import ShopSession, ShopSessionManager
from .shopify import ShopifyClient


ClientFactory = Callable[[ShopSession], ShopifyClient]

# Global instance (initialized on startup)
_session_manager: Optional[ShopSessionManager] = None


def init_dependencies():
    """Initialize global dependencies. Called on app startup."""
    global _session_manager
    _session_manager = ShopSessionManager(settings.session_secret)


def get_session_manager() -> ShopSessionManager:
    """Get the session manager instance."""
    if _session_manager is None:
        raise RuntimeError("Session manager not initialized")
    return _session_manager


def get_shop_session(request: Request) -> Optional[ShopSession]:
    """
    Resolve the shop session for this request (without raising).

    Handlers decide how to report a missing session.
    """
    return get_session_manager().get_session(request)


def get_client_factory() -> ClientFactory:
    """Factory building a Shopify client for a session."""
    return ShopifyClient.from_session
