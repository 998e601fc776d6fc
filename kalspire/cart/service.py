"""Cart store: owns the line items, persists them, notifies observers."""
from decimal import Decimal
from typing import Callable, Optional

from kalspire.config import Settings
from kalspire.errors import CartStorageError
from kalspire.logging import get_logger, sanitize_id_for_logging
from kalspire.services.models import ColorVariant, Product, to_snapshot
from kalspire.services.money import format_currency, to_float
from . import reducer
from .models import CartLineItem
from .storage import CartRepository, get_cart_repository

logger = get_logger(__name__)

Listener = Callable[[tuple[CartLineItem, ...]], None]


class CartStore:
    """
    Client-side shopping cart.

    Features:
    - Line items keyed by (product id, selected color)
    - Write-through persistence after every mutation
    - Observers for display layers

    Mutations go through the pure functions in `reducer`; the store only
    swaps in the result, saves it and tells subscribers.
    """

    def __init__(self, repository: CartRepository):
        self._repository = repository
        self._listeners: list[Listener] = []
        self._items: tuple[CartLineItem, ...] = self._restore()

    def _restore(self) -> tuple[CartLineItem, ...]:
        try:
            items = self._repository.load()
        except CartStorageError as e:
            logger.error("Cart restore failed, starting empty: %s", e)
            return ()
        logger.debug("Restored cart with %d line(s)", len(items))
        return items

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return self._items

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register an observer. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, items: tuple[CartLineItem, ...]) -> None:
        self._items = items
        try:
            self._repository.save(items)
        except CartStorageError as e:
            # Keep serving the in-memory cart; the next mutation retries the write
            logger.error("Cart save failed: %s", e)
        for listener in list(self._listeners):
            listener(items)

    def add(self, product: Product, quantity: int = 1, color: Optional[ColorVariant] = None) -> None:
        """Add units of a product (optionally in a specific color)."""
        if quantity > product.stock:
            logger.info(
                "Adding %d of %s above snapshot stock %d",
                quantity, sanitize_id_for_logging(product.id), product.stock,
            )
        self._commit(reducer.add_item(self._items, product, quantity, color))

    def remove(self, product_id: str, color_variant_id: Optional[str] = None) -> None:
        self._commit(reducer.remove_item(self._items, product_id, color_variant_id))

    def set_quantity(self, product_id: str, quantity: int, color_variant_id: Optional[str] = None) -> None:
        """Set absolute quantity; zero or less removes the line."""
        self._commit(reducer.update_quantity(self._items, product_id, quantity, color_variant_id))

    def clear(self) -> None:
        self._commit(reducer.clear_items(self._items))

    def total_item_count(self) -> int:
        return reducer.total_items(self._items)

    def total_price(self) -> Decimal:
        return reducer.total_price(self._items)

    def order_lines(self) -> list[dict]:
        """Snapshot of the cart for the order-creation request."""
        lines = []
        for item in self._items:
            line = {"productId": item.product_id, "quantity": item.quantity}
            if item.selected_color is not None:
                line["selectedColor"] = to_snapshot(item.selected_color)
            lines.append(line)
        return lines

    def summary(self) -> dict:
        """Get cart summary for display layers."""
        if not self._items:
            return {
                "is_empty": True,
                "total_items": 0,
                "items": [],
                "total": 0.0,
                "total_display": format_currency(0),
            }

        return {
            "is_empty": False,
            "total_items": self.total_item_count(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product.name,
                    "color": item.selected_color.name if item.selected_color else None,
                    "quantity": item.quantity,
                    "unit_price": to_float(item.unit_price),
                    "total": to_float(item.line_total),
                }
                for item in self._items
            ],
            "total": to_float(self.total_price()),
            "total_display": format_currency(self.total_price()),
        }


def create_cart_store(settings: Optional[Settings] = None) -> CartStore:
    """Build a cart store over the configured repository."""
    return CartStore(get_cart_repository(settings))
