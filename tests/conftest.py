"""
Shared fixtures: an in-memory Shopify Admin API and a FastAPI test client.
"""

import json
import re
from typing import Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from app.auth import ShopSession
from app.shopify import ShopifyClient

SHOP_DOMAIN = "test-store.myshopify.com"
ACCESS_TOKEN = "shpat_test"

API_PREFIX_RE = re.compile(r"^/admin/api/[^/]+/")

Handler = Callable[[httpx.Request], httpx.Response]


class FakeShopify:
    """Records every request and answers from registered routes."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Handler] = {}

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> None:
        """Register a canned response for METHOD path (relative to the API base)."""
        payload = json if json is not None else {}
        self._routes[(method, path)] = lambda request: httpx.Response(
            status_code, json=payload, headers=headers
        )

    def add_handler(self, method: str, path: str, handler: Handler) -> None:
        self._routes[(method, path)] = handler

    def calls(self, method: Optional[str] = None) -> List[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    def relative_path(self, request: httpx.Request) -> str:
        return API_PREFIX_RE.sub("", request.url.path)

    def body(self, request: httpx.Request) -> dict:
        return json.loads(request.content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, self.relative_path(request)))
        if route is None:
            return httpx.Response(404, json={"errors": "Not Found"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def client(self) -> ShopifyClient:
        return ShopifyClient(SHOP_DOMAIN, ACCESS_TOKEN, transport=self.transport)

    def client_factory(self, session: ShopSession) -> ShopifyClient:
        return ShopifyClient(
            session.shop, session.access_token, transport=self.transport
        )


def make_product(
    product_id=1,
    title="Product",
    status="active",
    vendor="Acme",
    variants=None,
    images=None,
) -> dict:
    """Build a product record shaped like Shopify's REST payload."""
    return {
        "id": product_id,
        "title": title,
        "status": status,
        "vendor": vendor,
        "variants": variants if variants is not None else [],
        "images": images if images is not None else [],
    }


@pytest.fixture
def shopify() -> FakeShopify:
    return FakeShopify()


@pytest.fixture
def shop_session() -> ShopSession:
    return ShopSession(shop=SHOP_DOMAIN, access_token=ACCESS_TOKEN)


@pytest.fixture
def api_client(shopify, shop_session):
    """Test client with session and Shopify transport overridden."""
    from app.main import app
    from app.dependencies import get_client_factory, get_shop_session

    app.dependency_overrides[get_shop_session] = lambda: shop_session
    app.dependency_overrides[get_client_factory] = lambda: shopify.client_factory
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(shopify):
    """Test client without a session override."""
    from app.main import app
    from app.dependencies import get_client_factory

    app.dependency_overrides[get_client_factory] = lambda: shopify.client_factory
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
