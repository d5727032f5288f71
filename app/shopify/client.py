"""
Shopify Admin REST API client.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class ShopifyClientError(Exception):
    """Base exception for Shopify client errors."""
    pass


class ShopifyAuthError(ShopifyClientError):
    """Missing or invalid shop credentials."""
    pass


class ShopifyTransportError(ShopifyClientError):
    """Network failure while talking to Shopify."""
    pass


class ShopifyAPIError(ShopifyClientError):
    """Shopify answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ShopifyResponseFormatError(ShopifyClientError):
    """Shopify answered 200 but the body is not shaped as expected."""
    pass


def clean_shop_domain(shop_domain: str) -> str:
    """Strip scheme and trailing slash from a shop domain."""
    domain = shop_domain.strip()
    if domain.startswith("https://"):
        domain = domain[8:]
    elif domain.startswith("http://"):
        domain = domain[7:]
    return domain.rstrip("/")


def decode_json(response: httpx.Response) -> Optional[Any]:
    """Return the decoded JSON body, or None when the body is not JSON."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


class ShopifyClient:
    """
    Async HTTP client for the Shopify Admin REST API, bound to one shop.

    Non-2xx responses are returned as-is; callers inspect
    ``response.status_code`` and the JSON error body themselves.
    Only network failures raise (as ShopifyTransportError).
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Shopify client.

        Args:
            shop_domain: Store domain (e.g., "mystore.myshopify.com")
            access_token: Admin API access token
            api_version: Admin API version, defaults to settings
            transport: Optional httpx transport (used by tests)
        """
        if not shop_domain or not access_token:
            raise ShopifyAuthError("Invalid session data")

        self.shop_domain = clean_shop_domain(shop_domain)
        self.access_token = access_token
        self.api_version = api_version or settings.shopify_api_version
        self.base_url = (
            f"https://{self.shop_domain}/admin/api/{self.api_version}/"
        )

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_session(cls, session, **kwargs) -> "ShopifyClient":
        """Build a client from a resolved ShopSession."""
        return cls(session.shop, session.access_token, **kwargs)

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(
                    settings.shopify_timeout,
                    connect=settings.shopify_connect_timeout,
                ),
                headers={
                    "Content-Type": "application/json",
                    "X-Shopify-Access-Token": self.access_token,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request relative to the shop's Admin API base URL.

        Raises:
            ShopifyTransportError: If the request could not be completed
        """
        client = self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed for {self.shop_domain}: {e}")
            raise ShopifyTransportError(str(e)) from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    async def get(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        return await self.request("GET", path, params=params)

    async def put(self, path: str, json: Dict[str, Any]) -> httpx.Response:
        return await self.request("PUT", path, json=json)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
