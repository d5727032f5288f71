#!/usr/bin/env python3
"""
Apply a bulk discount from the command line, outside the web server.
Usage: python scripts/apply_discount.py <shop-domain> <access-token> <percentage> <product-id>...
"""

import asyncio
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from app.models import DiscountRequest
from app.processor import apply_discount
from app.shopify import ShopifyClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


async def main(argv):
    if len(argv) < 4:
        print("Usage: python scripts/apply_discount.py <shop-domain> <access-token> <percentage> <product-id>...")
        sys.exit(1)

    shop, access_token, percentage, product_ids = argv[0], argv[1], argv[2], argv[3:]

    try:
        request = DiscountRequest(product_ids=product_ids, discount_percentage=percentage)
    except ValidationError as e:
        logger.error(f"Invalid request: {e}")
        sys.exit(1)

    async with ShopifyClient(shop, access_token) as client:
        outcome = await apply_discount(client, request)

    logger.info(outcome.message)

    if outcome.failed:
        for failure in outcome.failed:
            logger.error(f"  {failure.id}: {failure.error}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
