"""
Business rules for discount pricing.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[Decimal, float, int, str]

CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")
HUNDRED = Decimal("100")


def to_decimal(value: Optional[Number]) -> Decimal:
    """Convert a price-like value to Decimal (None counts as zero)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class DiscountInfo:
    """Display prices for one variant."""

    price: Decimal
    discounted_price: Optional[Decimal] = None
    discount_rate: Optional[Decimal] = None

    def as_floats(self) -> dict:
        """Plain numbers for API payloads."""
        return {
            "price": float(self.price),
            "discounted_price": (
                float(self.discounted_price) if self.discounted_price is not None else None
            ),
            "discount_rate": (
                float(self.discount_rate) if self.discount_rate is not None else None
            ),
        }


def calculate_discount_info(
    price: Optional[Number],
    compare_at_price: Optional[Number],
) -> DiscountInfo:
    """
    Derive display prices from a variant's price and compare-at price.

    Rules:
    1. If compare_at_price > price > 0 the variant is discounted:
       shown price = compare_at_price, discounted price = price,
       rate = (compare_at - price) / compare_at * 100, one decimal
    2. Otherwise shown price = compare_at_price if non-zero, else price,
       and there is no discounted price or rate

    Args:
        price: Current selling price
        compare_at_price: Crossed-out reference price (may be None)

    Returns:
        DiscountInfo with the display values
    """
    current = to_decimal(price)
    compare_at = to_decimal(compare_at_price)

    if compare_at > 0 and current > 0 and compare_at > current:
        rate = ((compare_at - current) / compare_at * HUNDRED).quantize(
            TENTHS, rounding=ROUND_HALF_UP
        )
        return DiscountInfo(
            price=compare_at,
            discounted_price=current,
            discount_rate=rate,
        )

    return DiscountInfo(price=compare_at if compare_at != 0 else current)


def calculate_discounted_price(price: Number, percentage: Number) -> Decimal:
    """
    Apply a percentage discount to a price.

    Args:
        price: Original price
        percentage: Discount in percent (0-100)

    Returns:
        Discounted price rounded to cents
    """
    original = to_decimal(price)
    rate = to_decimal(percentage)
    return (original * (HUNDRED - rate) / HUNDRED).quantize(
        CENTS, rounding=ROUND_HALF_UP
    )

