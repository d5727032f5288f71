"""
Signed shop sessions.

The admin UI receives a token once the shop is authenticated; every API
request carries it back as a cookie or bearer token.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired


# Session duration: 24 hours
SESSION_MAX_AGE = 24 * 60 * 60  # seconds
SESSION_COOKIE_NAME = "shop_session"


@dataclass
class ShopSession:
    """Shop identity and Admin API credential for one request."""

    shop: str
    access_token: str

    @property
    def is_valid(self) -> bool:
        return bool(self.shop) and bool(self.access_token)


class ShopSessionManager:
    """Issues and verifies signed shop session tokens."""

    def __init__(self, secret_key: str):
        """
        Initialize session manager.

        Args:
            secret_key: Secret key for signing tokens
        """
        self._serializer = URLSafeTimedSerializer(secret_key, salt="shop-session")

    def create_token(self, shop: str, access_token: str) -> str:
        """Sign a session for the given shop."""
        return self._serializer.dumps({"shop": shop, "access_token": access_token})

    def load_token(self, token: str) -> Optional[ShopSession]:
        """Verify a token; None if tampered, expired or malformed."""
        try:
            data = self._serializer.loads(token, max_age=SESSION_MAX_AGE)
        except (BadSignature, SignatureExpired):
            return None

        if not isinstance(data, dict):
            return None

        return ShopSession(
            shop=data.get("shop") or "",
            access_token=data.get("access_token") or "",
        )

    def get_session(self, request: Request) -> Optional[ShopSession]:
        """
        Get the shop session from the request.

        Looks at the session cookie first, then an
        ``Authorization: Bearer <token>`` header.

        Args:
            request: FastAPI request object

        Returns:
            ShopSession or None if absent/invalid/expired
        """
        token = request.cookies.get(SESSION_COOKIE_NAME)
        if not token:
            auth_header = request.headers.get("authorization", "")
            scheme, _, credentials = auth_header.partition(" ")
            if scheme.lower() == "bearer" and credentials:
                token = credentials.strip()

        if not token:
            return None

        return self.load_token(token)
