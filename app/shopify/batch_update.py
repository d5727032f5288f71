"""
Variant price updates for Shopify products.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from app.shopify.client import ShopifyAPIError, ShopifyClient, decode_json
from app.shopify.errors import format_error_message

logger = logging.getLogger(__name__)


@dataclass
class VariantPriceUpdate:
    """A price change applied to one variant."""

    variant_id: Union[int, str]
    original_price: Decimal
    discounted_price: Decimal

    def to_payload(self) -> dict:
        """
        Body for PUT variants/{id}.json.

        The pre-discount price becomes the compare-at price.
        """
        return {
            "variant": {
                "id": self.variant_id,
                "price": f"{self.discounted_price:.2f}",
                "compare_at_price": float(self.original_price),
            }
        }


async def update_variant_price(
    client: ShopifyClient, update: VariantPriceUpdate
) -> None:
    """
    Send one variant price update.

    Args:
        client: ShopifyClient instance
        update: The change to apply

    Raises:
        ShopifyAPIError: If Shopify does not answer 200
        ShopifyTransportError: If the request could not be completed
    """
    response = await client.put(
        f"variants/{update.variant_id}.json", json=update.to_payload()
    )

    if response.status_code != 200:
        body = decode_json(response)
        errors = body.get("errors") if isinstance(body, dict) else None
        message = "Failed to update variant prices"
        if errors:
            message = f"{message}: {format_error_message(errors)}"
        logger.warning(
            f"Variant {update.variant_id} update rejected "
            f"({response.status_code}): {message}"
        )
        raise ShopifyAPIError(message, status_code=response.status_code)

    logger.debug(
        f"Variant {update.variant_id}: {update.original_price} -> "
        f"{update.discounted_price}"
    )
