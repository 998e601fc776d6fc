"""Wishlist store.

Holds the ids of products the shopper saved for later, in the order they
were added. Product details are fetched by the display layer; only ids are
kept here.
"""
from typing import Callable, Optional

from kalspire.config import Settings
from kalspire.errors import CartStorageError
from kalspire.logging import get_logger
from .storage import WishlistRepository, get_wishlist_repository

logger = get_logger(__name__)

Listener = Callable[[tuple[str, ...]], None]


class WishlistStore:
    """Saved product ids with write-through persistence."""

    def __init__(self, repository: WishlistRepository):
        self._repository = repository
        self._listeners: list[Listener] = []
        try:
            self._items = repository.load()
        except CartStorageError as e:
            logger.error("Wishlist restore failed, starting empty: %s", e)
            self._items = ()

    @property
    def items(self) -> tuple[str, ...]:
        return self._items

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, items: tuple[str, ...]) -> None:
        self._items = items
        try:
            self._repository.save(items)
        except CartStorageError as e:
            logger.error("Wishlist save failed: %s", e)
        for listener in list(self._listeners):
            listener(items)

    def add(self, product_id: str) -> None:
        if product_id in self._items:
            return
        self._commit(self._items + (product_id,))

    def remove(self, product_id: str) -> None:
        if product_id not in self._items:
            return
        self._commit(tuple(i for i in self._items if i != product_id))

    def contains(self, product_id: str) -> bool:
        return product_id in self._items

    def toggle(self, product_id: str) -> bool:
        """Add or remove. Returns True when the product is now saved."""
        if self.contains(product_id):
            self.remove(product_id)
            return False
        self.add(product_id)
        return True

    def clear(self) -> None:
        self._commit(())

    def __len__(self) -> int:
        return len(self._items)


def create_wishlist_store(settings: Optional[Settings] = None) -> WishlistStore:
    return WishlistStore(get_wishlist_repository(settings))
