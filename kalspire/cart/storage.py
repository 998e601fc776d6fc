"""Cart persistence: serialization plus repositories over durable slots."""
import json
from pathlib import Path
from typing import Iterable, Optional, Protocol

from kalspire.config import CART_STORAGE_KEY, DEFAULT_DATA_DIR, Settings, get_settings
from kalspire.db import RedisKeys, TTL
from kalspire.errors import ERROR_CORRUPTED_SLOT
from kalspire.logging import get_logger
from kalspire.storage import FileSlot, MemorySlot, RedisSlot, Slot, create_slot
from .models import CartLineItem
from .reducer import normalize_items

logger = get_logger(__name__)


class CartRepository(Protocol):
    """Where the cart lives between sessions."""

    def load(self) -> tuple[CartLineItem, ...]: ...

    def save(self, items: Iterable[CartLineItem]) -> None: ...


def dump_cart(items: Iterable[CartLineItem]) -> str:
    """Serialize line items to the `{"items": [...]}` document."""
    return json.dumps({"items": [item.to_dict() for item in items]}, ensure_ascii=False)


def load_cart(raw: str) -> tuple[CartLineItem, ...]:
    """Parse a stored document.

    Zero-quantity lines are dropped and lines with the same identity key are
    merged, so the result always satisfies the cart invariants.

    Raises:
        ValueError, KeyError, TypeError: on malformed content
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise TypeError("cart document must be an object")

    entries = data.get("items", [])
    if not isinstance(entries, list):
        raise TypeError("cart items must be a list")
    if not all(isinstance(entry, dict) for entry in entries):
        raise TypeError("cart items must be objects")
    if not all(isinstance(entry.get("productId"), str) for entry in entries):
        raise TypeError("productId must be a string")

    return normalize_items(CartLineItem.from_dict(entry) for entry in entries)


class SlotCartRepository:
    """Cart repository backed by any durable slot."""

    def __init__(self, slot: Slot):
        self.slot = slot

    def load(self) -> tuple[CartLineItem, ...]:
        try:
            raw = self.slot.read()
            if not raw:
                return ()
            return load_cart(raw)
        except (ValueError, KeyError, TypeError) as e:
            # Corrupted data - clear it and start empty
            logger.warning("%s %s: %s", ERROR_CORRUPTED_SLOT, self.slot.name, e)
            self.slot.delete()
            return ()

    def save(self, items: Iterable[CartLineItem]) -> None:
        self.slot.write(dump_cart(items))


class InMemoryCartRepository(SlotCartRepository):
    """Cart kept in process memory."""

    def __init__(self, raw: Optional[str] = None):
        super().__init__(MemorySlot(CART_STORAGE_KEY, raw))

    @property
    def raw(self) -> Optional[str]:
        return self.slot.raw


class FileCartRepository(SlotCartRepository):
    """Cart stored in `<data_dir>/cart-storage.json`."""

    def __init__(self, data_dir: Path = DEFAULT_DATA_DIR):
        super().__init__(FileSlot(CART_STORAGE_KEY, data_dir))


class RedisCartRepository(SlotCartRepository):
    """Cart stored in Upstash Redis under `cart-storage:{session_id}`."""

    def __init__(self, redis, session_id: str = "local"):
        super().__init__(RedisSlot(RedisKeys.cart_key(session_id), redis, ttl=TTL.CART))


def get_cart_repository(settings: Optional[Settings] = None) -> CartRepository:
    """Repository for the configured storage backend."""
    settings = settings or get_settings()
    slot = create_slot(
        settings,
        CART_STORAGE_KEY,
        RedisKeys.cart_key(settings.session_id),
        ttl=TTL.CART,
    )
    return SlotCartRepository(slot)
