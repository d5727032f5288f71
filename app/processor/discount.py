"""
Bulk percentage discounts across selected products.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from pydantic import ValidationError

from ..config import settings
from ..models import (
    DiscountRequest,
    FailedProduct,
    ProcessedProduct,
    ShopifyProduct,
)
from ..shopify import (
    ShopifyAPIError,
    ShopifyClient,
    ShopifyClientError,
    ShopifyResponseFormatError,
    VariantPriceUpdate,
    decode_json,
    format_error_message,
    update_variant_price,
)
from .rules import calculate_discount_info, calculate_discounted_price

logger = logging.getLogger(__name__)


@dataclass
class ProductResult:
    """Outcome of discounting a single product."""
    product_id: str
    product: Optional[ProcessedProduct] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class DiscountOutcome:
    """Processed and failed products, each in request order."""
    processed: List[ProcessedProduct] = field(default_factory=list)
    failed: List[FailedProduct] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Successfully applied discount to {len(self.processed)} products"

    def to_response(self) -> dict:
        return {
            "success": True,
            "message": self.message,
            "products": [p.to_response() for p in self.processed],
            "failedProducts": [f.to_response() for f in self.failed],
        }


async def fetch_product(client: ShopifyClient, product_id: str) -> ShopifyProduct:
    """
    Fetch a single product with all of its variants.

    Raises:
        ShopifyAPIError: Shopify answered with a non-200 status
        ShopifyResponseFormatError: The body holds no usable product
    """
    response = await client.get(f"products/{product_id}.json")
    body = decode_json(response)

    if response.status_code != 200:
        errors = body.get("errors") if isinstance(body, dict) else None
        raise ShopifyAPIError(
            format_error_message(errors or "Failed to fetch product"),
            status_code=response.status_code,
        )

    raw = body.get("product") if isinstance(body, dict) else None
    if not isinstance(raw, dict):
        raise ShopifyResponseFormatError("Invalid product response from Shopify")

    try:
        return ShopifyProduct.model_validate(raw)
    except ValidationError as e:
        raise ShopifyResponseFormatError(
            "Invalid product response from Shopify"
        ) from e


async def discount_product_variants(
    client: ShopifyClient,
    product: ShopifyProduct,
    discount_percentage: float,
) -> Optional[VariantPriceUpdate]:
    """
    Discount every variant of a product, one request per variant, in order.

    A rejected update stops the remaining variants; updates already sent
    are not rolled back.

    Returns:
        The last update applied, or None if the product has no variants
    """
    last_update: Optional[VariantPriceUpdate] = None

    for variant in product.variants:
        update = VariantPriceUpdate(
            variant_id=variant.id,
            original_price=variant.price,
            discounted_price=calculate_discounted_price(
                variant.price, discount_percentage
            ),
        )
        await update_variant_price(client, update)
        last_update = update

    return last_update


async def discount_single_product(
    client: ShopifyClient,
    product_id: str,
    discount_percentage: float,
) -> ProductResult:
    """Discount one product; any error is captured in the result."""
    try:
        product = await fetch_product(client, product_id)
        last_update = await discount_product_variants(
            client, product, discount_percentage
        )

        if last_update is None:
            logger.warning(f"Product {product_id} has no variants to discount")
            return ProductResult(product_id=product_id, error="Product has no variants")

        # Reported prices follow the last variant updated
        info = calculate_discount_info(
            last_update.discounted_price, last_update.original_price
        )
        processed = ProcessedProduct(
            id=product_id,
            title=product.title,
            **info.as_floats(),
        )
        logger.info(
            f"Discounted product {product_id} "
            f"({len(product.variants)} variants, {discount_percentage}%)"
        )
        return ProductResult(product_id=product_id, product=processed)

    except ShopifyClientError as e:
        logger.warning(f"Failed to discount product {product_id}: {e}")
        return ProductResult(product_id=product_id, error=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error discounting product {product_id}")
        return ProductResult(product_id=product_id, error=f"Unexpected error: {e}")


async def apply_discount(
    client: ShopifyClient,
    request: Union[DiscountRequest, dict],
    *,
    max_concurrency: Optional[int] = None,
) -> DiscountOutcome:
    """
    Apply a percentage discount to every requested product.

    Failures are isolated per product: a failed id is recorded and the
    remaining ids are still processed.

    Args:
        client: Shopify client for the current shop
        request: Validated request, or raw body to validate
        max_concurrency: Products processed at once (defaults to settings)

    Returns:
        DiscountOutcome partitioning the ids into processed and failed

    Raises:
        ValidationError: The request is invalid (no upstream call is made)
    """
    if not isinstance(request, DiscountRequest):
        request = DiscountRequest.model_validate(request)

    limit = max_concurrency or settings.discount_max_concurrency
    percentage = request.discount_percentage

    logger.info(
        f"Applying {percentage}% discount to {len(request.product_ids)} products "
        f"on {client.shop_domain}"
    )

    if limit <= 1:
        results = [
            await discount_single_product(client, product_id, percentage)
            for product_id in request.product_ids
        ]
    else:
        semaphore = asyncio.Semaphore(limit)

        async def discount_with_semaphore(product_id: str) -> ProductResult:
            async with semaphore:
                return await discount_single_product(client, product_id, percentage)

        results = await asyncio.gather(
            *(discount_with_semaphore(pid) for pid in request.product_ids)
        )

    outcome = DiscountOutcome()
    for result in results:
        if result.success:
            outcome.processed.append(result.product)
        else:
            outcome.failed.append(FailedProduct(id=result.product_id, error=result.error))

    logger.info(
        f"Discount complete: {len(outcome.processed)} succeeded, "
        f"{len(outcome.failed)} failed"
    )
    return outcome
