"""Cart models: line items and their identity key."""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import NamedTuple, Optional

from kalspire.services.models import ColorVariant, Product, to_snapshot
from kalspire.services.money import multiply


class LineItemKey(NamedTuple):
    """Identity of a purchasable unit: product plus explicit color choice."""
    product_id: str
    color_variant_id: Optional[str] = None


@dataclass(frozen=True)
class CartLineItem:
    """Single line in the cart.

    `product` and `selected_color` are snapshots taken when the line was
    created. They are not refreshed against the live catalog, so price and
    stock may be stale until checkout.
    """
    product_id: str
    product: Product
    quantity: int
    selected_color: Optional[ColorVariant] = None

    @property
    def key(self) -> LineItemKey:
        color_id = self.selected_color.id if self.selected_color is not None else None
        return key_for(self.product_id, color_id)

    @property
    def unit_price(self) -> Decimal:
        return self.product.price

    @property
    def line_total(self) -> Decimal:
        """Snapshot price times quantity."""
        return multiply(self.product.price, self.quantity)

    def with_quantity(self, quantity: int) -> "CartLineItem":
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted camelCase layout."""
        data = {
            "productId": self.product_id,
            "product": to_snapshot(self.product),
            "quantity": self.quantity,
        }
        if self.selected_color is not None:
            data["selectedColor"] = to_snapshot(self.selected_color)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        """Create from the persisted layout."""
        color = data.get("selectedColor")
        return cls(
            product_id=data["productId"],
            product=Product.model_validate(data["product"]),
            quantity=int(data["quantity"]),
            selected_color=ColorVariant.model_validate(color) if color else None,
        )


def key_for(product_id: str, color_variant_id: Optional[str] = None) -> LineItemKey:
    """Build an identity key. An empty color id counts as no color."""
    return LineItemKey(product_id, color_variant_id or None)


def matches(item: CartLineItem, product_id: str, color_variant_id: Optional[str] = None) -> bool:
    """True when `item` is the line for (product_id, color_variant_id).

    A line without a color never matches a request with a color, and the
    other way around, even when the product offers a single color.
    """
    return item.key == key_for(product_id, color_variant_id)
