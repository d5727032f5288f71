"""
Processor package for catalog listing and bulk discounts.
"""

from .rules import (
    DiscountInfo,
    calculate_discount_info,
    calculate_discounted_price,
)
from .normalize import normalize_product
from .catalog import list_products, build_query_params, CatalogPage
from .discount import apply_discount, DiscountOutcome, ProductResult

__all__ = [
    "DiscountInfo",
    "calculate_discount_info",
    "calculate_discounted_price",
    "normalize_product",
    "list_products",
    "build_query_params",
    "CatalogPage",
    "apply_discount",
    "DiscountOutcome",
    "ProductResult",
]
