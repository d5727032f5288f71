"""
Shopify API module.
"""

from app.shopify.client import (
    ShopifyClient,
    ShopifyClientError,
    ShopifyAuthError,
    ShopifyTransportError,
    ShopifyAPIError,
    ShopifyResponseFormatError,
    decode_json,
)
from app.shopify.errors import format_error_message, UNKNOWN_ERROR_MESSAGE
from app.shopify.pagination import parse_link_header, PaginationCursors
from app.shopify.batch_update import VariantPriceUpdate, update_variant_price

__all__ = [
    "ShopifyClient",
    "ShopifyClientError",
    "ShopifyAuthError",
    "ShopifyTransportError",
    "ShopifyAPIError",
    "ShopifyResponseFormatError",
    "decode_json",
    "format_error_message",
    "UNKNOWN_ERROR_MESSAGE",
    "parse_link_header",
    "PaginationCursors",
    "VariantPriceUpdate",
    "update_variant_price",
]
