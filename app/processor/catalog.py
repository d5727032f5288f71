"""
Product listing against the Shopify catalog.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import settings
from ..models import CatalogQuery, NormalizedProduct, ShopifyProduct
from ..shopify import (
    ShopifyAPIError,
    ShopifyClient,
    ShopifyResponseFormatError,
    PaginationCursors,
    decode_json,
    format_error_message,
)
from .normalize import normalize_product

logger = logging.getLogger(__name__)


@dataclass
class CatalogPage:
    """One page of normalized products plus the cursors around it."""
    products: List[NormalizedProduct] = field(default_factory=list)
    pagination: PaginationCursors = field(default_factory=PaginationCursors)

    def to_response(self) -> dict:
        return {
            "success": True,
            "products": [p.to_response() for p in self.products],
            "pagination": self.pagination.to_response(),
        }


def build_query_params(
    query: CatalogQuery,
    page_size: Optional[int] = None,
    fields: Optional[str] = None,
) -> Dict[str, Any]:
    """Translate a CatalogQuery into products.json query parameters."""
    params = {
        "status": query.status,
        "vendor": query.vendor,
        "price_min": query.price_min,
        "price_max": query.price_max,
        "title": query.title_search,
        "limit": page_size or settings.products_page_size,
        "fields": fields or settings.product_fields,
        "page_info": query.cursor,
    }
    # Absent filters are left out rather than sent empty
    return {k: v for k, v in params.items() if v is not None and v != ""}


async def list_products(
    client: ShopifyClient,
    query: CatalogQuery,
    *,
    page_size: Optional[int] = None,
    fields: Optional[str] = None,
) -> CatalogPage:
    """
    Fetch one page of products.

    Exactly one request is made; cursors are returned, not followed.

    Args:
        client: Shopify client for the current shop
        query: Filters and optional cursor
        page_size: Override for the configured page size
        fields: Override for the configured field list

    Returns:
        CatalogPage with normalized products and pagination cursors

    Raises:
        ShopifyAPIError: Shopify answered with a non-200 status
        ShopifyResponseFormatError: The body has no usable products list
        ShopifyTransportError: The request could not be completed
    """
    params = build_query_params(query, page_size=page_size, fields=fields)
    response = await client.get("products.json", params=params)
    body = decode_json(response)

    if response.status_code != 200:
        errors = body.get("errors") if isinstance(body, dict) else None
        message = format_error_message(errors or "Shopify API error")
        logger.warning(
            f"Product listing failed for {client.shop_domain}: "
            f"{response.status_code} {message}"
        )
        raise ShopifyAPIError(message, status_code=response.status_code)

    raw_products = body.get("products") if isinstance(body, dict) else None
    if not isinstance(raw_products, list):
        raise ShopifyResponseFormatError("Invalid response format from Shopify")

    try:
        products = [
            normalize_product(ShopifyProduct.model_validate(raw))
            for raw in raw_products
        ]
    except ValidationError as e:
        logger.warning(f"Unexpected product shape from {client.shop_domain}: {e}")
        raise ShopifyResponseFormatError(
            "Invalid response format from Shopify"
        ) from e

    pagination = PaginationCursors.from_link_header(response.headers.get("link"))
    logger.info(
        f"Listed {len(products)} products for {client.shop_domain} "
        f"(next={pagination.has_next}, previous={pagination.has_previous})"
    )

    return CatalogPage(products=products, pagination=pagination)
