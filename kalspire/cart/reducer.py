"""
Cart reducer - pure state transitions over line items.

Every function takes the current items and returns a new tuple; the input is
never mutated. None of them raise: non-positive quantities mean removal and
unmatched ids leave the cart as it was.
"""
from decimal import Decimal
from typing import Iterable, Optional

from kalspire.services.models import ColorVariant, Product
from kalspire.services.money import add
from .models import CartLineItem, matches

Items = tuple[CartLineItem, ...]


def add_item(
    items: Iterable[CartLineItem],
    product: Product,
    quantity: int = 1,
    color: Optional[ColorVariant] = None,
) -> Items:
    """Add `quantity` units, merging into the line with the same identity key.

    Stock is not checked here; callers decide whether to allow it.
    """
    items = tuple(items)
    if quantity <= 0:
        return items

    color_id = color.id if color is not None else None
    if any(matches(item, product.id, color_id) for item in items):
        return tuple(
            item.with_quantity(item.quantity + quantity)
            if matches(item, product.id, color_id)
            else item
            for item in items
        )

    line = CartLineItem(
        product_id=product.id,
        product=product,
        quantity=quantity,
        selected_color=color,
    )
    return items + (line,)


def remove_item(
    items: Iterable[CartLineItem],
    product_id: str,
    color_variant_id: Optional[str] = None,
) -> Items:
    """Drop the line for (product_id, color). Without a color only the colorless line goes."""
    return tuple(item for item in items if not matches(item, product_id, color_variant_id))


def update_quantity(
    items: Iterable[CartLineItem],
    product_id: str,
    quantity: int,
    color_variant_id: Optional[str] = None,
) -> Items:
    """Set an absolute quantity; zero or less removes the line."""
    if quantity <= 0:
        return remove_item(items, product_id, color_variant_id)

    return tuple(
        item.with_quantity(quantity) if matches(item, product_id, color_variant_id) else item
        for item in items
    )


def clear_items(items: Iterable[CartLineItem] = ()) -> Items:
    return ()


def total_items(items: Iterable[CartLineItem]) -> int:
    """Total number of units in the cart."""
    return sum(item.quantity for item in items)


def total_price(items: Iterable[CartLineItem]) -> Decimal:
    """Sum of snapshot price times quantity."""
    total = Decimal("0")
    for item in items:
        total = add(total, item.line_total)
    return total


def normalize_items(items: Iterable[CartLineItem]) -> Items:
    """Restore the cart invariants on a collection read from storage.

    Lines with quantity below 1 are dropped and lines sharing an identity key
    are merged into the first one, keeping its snapshot and position.
    """
    merged: dict = {}
    for item in items:
        if item.quantity < 1:
            continue
        existing = merged.get(item.key)
        if existing is None:
            merged[item.key] = item
        else:
            merged[item.key] = existing.with_quantity(existing.quantity + item.quantity)
    return tuple(merged.values())
