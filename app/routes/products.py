"""
Product listing and bulk discount API routes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..auth import ShopSession
from ..dependencies import ClientFactory, get_client_factory, get_shop_session
from ..models import CatalogQuery, DiscountRequest
from ..processor import apply_discount, list_products
from ..shopify import ShopifyAuthError, ShopifyTransportError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


def require_session(session: Optional[ShopSession]) -> ShopSession:
    """Reject requests without usable shop credentials."""
    if session is None:
        raise ShopifyAuthError("No Shopify session found")
    if not session.is_valid:
        raise ShopifyAuthError("Invalid session data")
    return session


def validation_message(error: ValidationError) -> str:
    """Compact one-line summary of a pydantic validation error."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)


@router.get("/products")
async def index(
    status: Optional[str] = None,
    vendor: Optional[str] = None,
    price_min: Optional[str] = None,
    price_max: Optional[str] = None,
    query: Optional[str] = None,
    page_info: Optional[str] = None,
    session: Optional[ShopSession] = Depends(get_shop_session),
    client_factory: ClientFactory = Depends(get_client_factory),
):
    """List one page of products with optional filters."""
    try:
        shop_session = require_session(session)
        catalog_query = CatalogQuery(
            status=status,
            vendor=vendor,
            price_min=price_min,
            price_max=price_max,
            title_search=query,
            cursor=page_info,
        )

        async with client_factory(shop_session) as client:
            page = await list_products(client, catalog_query)

        return page.to_response()

    except ShopifyTransportError as e:
        logger.error(f"Shopify API error while listing products: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Failed to communicate with Shopify",
                "message": str(e),
            },
        )

    except Exception as e:
        logger.exception(f"Products listing failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Failed to fetch products",
                "message": str(e),
            },
        )


@router.post("/apply-discount")
async def apply_discount_endpoint(
    request: Request,
    session: Optional[ShopSession] = Depends(get_shop_session),
    client_factory: ClientFactory = Depends(get_client_factory),
):
    """
    Apply a percentage discount to the selected products.

    Partial failures still answer 200; failed ids are listed in
    ``failedProducts``.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            raise ValueError("Request body must be valid JSON")

        discount_request = DiscountRequest.model_validate(body)
        shop_session = require_session(session)

        async with client_factory(shop_session) as client:
            outcome = await apply_discount(client, discount_request)

        return outcome.to_response()

    except ValidationError as e:
        message = validation_message(e)
        logger.warning(f"Rejected discount request: {message}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to apply discounts", "message": message},
        )

    except Exception as e:
        logger.exception(f"Discount application failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to apply discounts", "message": str(e)},
        )
