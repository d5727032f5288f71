"""
Tests for the product and discount HTTP routes.
"""

import httpx
import pytest

from app.auth import ShopSessionManager
from app.config import settings
from conftest import ACCESS_TOKEN, SHOP_DOMAIN, make_product


class TestListProductsRoute:
    """Tests for GET /products."""

    @pytest.mark.parametrize("path", ["/products", "/api/products"])
    def test_success(self, api_client, shopify, path):
        shopify.add(
            "GET", "products.json",
            json={"products": [make_product(
                product_id=7,
                title="Lamp",
                variants=[{"id": 1, "price": "80.00", "compare_at_price": "100.00"}],
            )]},
            headers={"Link": '<https://x/products.json?page_info=NEXT>; rel="next"'},
        )

        response = api_client.get(path)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "products": [{
                "id": "7",
                "title": "Lamp",
                "status": "active",
                "vendor": "Acme",
                "price": 100.0,
                "discountedPrice": 80.0,
                "discountRate": 20.0,
                "image": None,
            }],
            "pagination": {
                "previous_page_info": None,
                "next_page_info": "NEXT",
                "has_previous": False,
                "has_next": True,
            },
        }

    def test_odd_record_does_not_fail_page(self, api_client, shopify):
        shopify.add("GET", "products.json", json={"products": [
            make_product(product_id=1),
            make_product(product_id=2, status="unlisted"),
            make_product(product_id=3, images=[{"id": 5, "src": None}]),
        ]})

        response = api_client.get("/products")

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["id"] for p in products] == ["1", "2", "3"]
        assert products[1]["status"] == "unlisted"
        assert products[2]["image"] is None

    def test_query_parameters_forwarded(self, api_client, shopify):
        shopify.add("GET", "products.json", json={"products": []})

        api_client.get("/products", params={
            "status": "draft",
            "vendor": "Acme",
            "price_min": "5",
            "price_max": "25",
            "query": "lamp",
            "page_info": "CURSOR",
        })

        params = shopify.requests[0].url.params
        assert params["status"] == "draft"
        assert params["vendor"] == "Acme"
        assert params["price_min"] == "5"
        assert params["price_max"] == "25"
        assert params["title"] == "lamp"
        assert params["page_info"] == "CURSOR"

    def test_upstream_error(self, api_client, shopify):
        shopify.add("GET", "products.json", status_code=402,
                    json={"errors": "Unavailable Shop"})

        response = api_client.get("/products")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to fetch products",
            "message": "Unavailable Shop",
        }

    def test_malformed_response(self, api_client, shopify):
        shopify.add("GET", "products.json", json={"items": []})

        response = api_client.get("/products")

        assert response.status_code == 500
        assert response.json()["message"] == "Invalid response format from Shopify"

    def test_transport_error(self, api_client, shopify):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        shopify.add_handler("GET", "products.json", refuse)

        response = api_client.get("/products")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to communicate with Shopify",
            "message": "connection refused",
        }

    def test_missing_session(self, anonymous_client, shopify):
        response = anonymous_client.get("/products")

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert response.json()["message"] == "No Shopify session found"
        assert shopify.requests == []

    def test_bearer_session(self, anonymous_client, shopify):
        shopify.add("GET", "products.json", json={"products": []})
        token = ShopSessionManager(settings.session_secret).create_token(
            SHOP_DOMAIN, ACCESS_TOKEN
        )

        response = anonymous_client.get(
            "/api/products", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert shopify.requests[0].headers["X-Shopify-Access-Token"] == ACCESS_TOKEN

    def test_session_with_empty_token(self, anonymous_client, shopify):
        token = ShopSessionManager(settings.session_secret).create_token(SHOP_DOMAIN, "")

        response = anonymous_client.get(
            "/products", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Invalid session data"
        assert shopify.requests == []


class TestApplyDiscountRoute:
    """Tests for POST /apply-discount."""

    @pytest.mark.parametrize("path", ["/apply-discount", "/api/apply-discount"])
    def test_partial_success_is_200(self, api_client, shopify, path):
        shopify.add("GET", "products/1.json", json={"product": make_product(
            product_id=1, title="Mug", variants=[{"id": 101, "price": "200.00"}]
        )})
        shopify.add("PUT", "variants/101.json", json={})
        shopify.add("GET", "products/2.json", status_code=404, json={"errors": "Not Found"})

        response = api_client.post(
            path, json={"productIds": ["1", "2"], "discountPercentage": 50}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Successfully applied discount to 1 products"
        assert body["products"] == [{
            "id": "1",
            "title": "Mug",
            "price": 200.0,
            "discountedPrice": 100.0,
            "discountRate": 50.0,
        }]
        assert body["failedProducts"] == [{"id": "2", "error": "Not Found"}]

    def test_invalid_percentage_rejected_without_upstream_calls(self, api_client, shopify):
        response = api_client.post(
            "/apply-discount", json={"productIds": ["1"], "discountPercentage": 150}
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to apply discounts"
        assert "discountPercentage" in body["message"]
        assert shopify.requests == []

    def test_empty_product_ids_rejected(self, api_client, shopify):
        response = api_client.post(
            "/apply-discount", json={"productIds": [], "discountPercentage": 10}
        )

        assert response.status_code == 500
        assert shopify.requests == []

    def test_invalid_json_rejected(self, api_client, shopify):
        response = api_client.post(
            "/apply-discount",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to apply discounts",
            "message": "Request body must be valid JSON",
        }
        assert shopify.requests == []

    def test_missing_session(self, anonymous_client, shopify):
        response = anonymous_client.post(
            "/apply-discount", json={"productIds": ["1"], "discountPercentage": 10}
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to apply discounts",
            "message": "No Shopify session found",
        }
        assert shopify.requests == []


def test_health(api_client):
    assert api_client.get("/health").json() == {"status": "ok"}
