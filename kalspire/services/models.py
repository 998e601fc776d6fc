"""Catalog Models - Pydantic snapshots of catalog entities.

Field aliases follow the camelCase layout of the storefront REST API and of
the persisted client slots.
"""
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from kalspire.services.money import to_decimal as _to_decimal


class ColorVariant(BaseModel):
    """Color option of a product with its own stock."""
    id: str
    name: str
    hex_code: str = Field(default="#000000", alias="hexCode")
    stock: int = 0

    class Config:
        extra = "ignore"
        populate_by_name = True
        frozen = True


class Category(BaseModel):
    """Product category."""
    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    is_active: bool = Field(default=True, alias="isActive")

    class Config:
        extra = "ignore"
        populate_by_name = True
        frozen = True


class Product(BaseModel):
    """Product as returned by the catalog API."""
    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    original_price: Optional[Decimal] = Field(default=None, alias="originalPrice")
    images: list[str] = []
    category_id: Optional[str] = Field(default=None, alias="categoryId")
    category: Optional[Category] = None
    stock: int = 0
    is_available: bool = Field(default=True, alias="isAvailable")
    tags: list[str] = []
    color_variants: list[ColorVariant] = Field(default_factory=list, alias="colorVariants")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    class Config:
        extra = "ignore"  # Ignore unknown fields from the API
        populate_by_name = True
        frozen = True

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("original_price", mode="before")
    @classmethod
    def convert_original_price_to_decimal(cls, v):
        if v is None:
            return None
        return _to_decimal(v)


def to_snapshot(model: BaseModel) -> dict[str, Any]:
    """Dump a model to its camelCase JSON-ready dict."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
