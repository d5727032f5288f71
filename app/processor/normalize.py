"""
Mapping of Shopify product records to table rows.
"""

from app.models import NormalizedProduct, ShopifyProduct
from app.processor.rules import calculate_discount_info


def normalize_product(product: ShopifyProduct) -> NormalizedProduct:
    """
    Summarize a product from its first variant and first image.

    A product without variants is priced at 0; one without images
    has no image.
    """
    variant = product.variants[0] if product.variants else None
    if variant is not None:
        info = calculate_discount_info(variant.price, variant.compare_at_price)
    else:
        info = calculate_discount_info(0, 0)

    image = product.images[0].src if product.images else None

    return NormalizedProduct(
        id=str(product.id),
        title=product.title,
        status=product.status,
        vendor=product.vendor,
        image=image,
        **info.as_floats(),
    )
