"""
Pydantic models for Shopify records and API payloads.
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class ProductStatus(str, Enum):
    """Publication status of a Shopify product."""
    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


# Upstream records (validated at the boundary, unknown keys ignored)

class ShopifyImage(BaseModel):
    """A product image as returned by Shopify."""
    model_config = ConfigDict(extra="ignore")

    src: Optional[str] = None


class ShopifyVariant(BaseModel):
    """A product variant as returned by Shopify."""
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    price: Decimal = Decimal("0")
    compare_at_price: Optional[Decimal] = None

    @field_validator("price", mode="before")
    @classmethod
    def _missing_price_is_zero(cls, value):
        if value is None or value == "":
            return Decimal("0")
        return value

    @field_validator("compare_at_price", mode="before")
    @classmethod
    def _blank_compare_at_is_none(cls, value):
        if value == "":
            return None
        return value


class ShopifyProduct(BaseModel):
    """A product as returned by Shopify."""
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    title: str = ""
    status: Optional[str] = None
    vendor: str = ""
    variants: List[ShopifyVariant] = Field(default_factory=list)
    images: List[ShopifyImage] = Field(default_factory=list)

    @field_validator("title", "vendor", mode="before")
    @classmethod
    def _null_text_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("variants", "images", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value):
        return [] if value is None else value


# Outward payloads (camelCase on the wire)

class ApiModel(BaseModel):
    """Base for payloads exchanged with the admin UI."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class NormalizedProduct(ApiModel):
    """One summary row of the product table."""
    id: str
    title: str
    # Statuses outside the known set are passed through as plain strings
    status: Optional[Union[ProductStatus, str]] = Field(
        default=None, union_mode="left_to_right"
    )
    vendor: str
    price: float
    discounted_price: Optional[float] = None
    discount_rate: Optional[float] = None
    image: Optional[str] = None


class CatalogQuery(BaseModel):
    """Filters and cursor for one page of the product listing."""
    status: Optional[str] = None
    vendor: Optional[str] = None
    price_min: Optional[str] = None
    price_max: Optional[str] = None
    title_search: Optional[str] = None
    cursor: Optional[str] = None


class DiscountRequest(ApiModel):
    """Body of a bulk discount request."""
    product_ids: List[StrictStr] = Field(min_length=1)
    discount_percentage: float = Field(ge=0, le=100)

    @field_validator("product_ids")
    @classmethod
    def _ids_not_blank(cls, value: List[str]) -> List[str]:
        for product_id in value:
            if not product_id.strip():
                raise ValueError("product ids must be non-empty strings")
        return value

    @field_validator("discount_percentage", mode="before")
    @classmethod
    def _percentage_is_numeric(cls, value):
        if isinstance(value, bool):
            raise ValueError("discount percentage must be a number")
        return value


class ProcessedProduct(ApiModel):
    """A product whose variants were all discounted."""
    id: str
    title: str
    price: float
    discounted_price: Optional[float] = None
    discount_rate: Optional[float] = None


class FailedProduct(ApiModel):
    """A product that could not be (fully) discounted."""
    id: str
    error: str
