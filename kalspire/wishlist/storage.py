"""Wishlist persistence."""
import json
from typing import Iterable, Optional

from kalspire.config import WISHLIST_STORAGE_KEY, Settings, get_settings
from kalspire.db import RedisKeys, TTL
from kalspire.errors import ERROR_CORRUPTED_SLOT
from kalspire.logging import get_logger
from kalspire.storage import MemorySlot, Slot, create_slot

logger = get_logger(__name__)


class WishlistRepository:
    """Stores the wishlist as `{"items": [product ids]}` in a slot."""

    def __init__(self, slot: Slot):
        self.slot = slot

    def load(self) -> tuple[str, ...]:
        try:
            raw = self.slot.read()
            if not raw:
                return ()
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError("wishlist document must be an object")
            ids = data["items"]
            if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
                raise TypeError("wishlist items must be a list of ids")
            return tuple(dict.fromkeys(ids))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("%s %s: %s", ERROR_CORRUPTED_SLOT, self.slot.name, e)
            self.slot.delete()
            return ()

    def save(self, product_ids: Iterable[str]) -> None:
        self.slot.write(json.dumps({"items": list(product_ids)}))


def in_memory_wishlist_repository() -> WishlistRepository:
    return WishlistRepository(MemorySlot(WISHLIST_STORAGE_KEY))


def get_wishlist_repository(settings: Optional[Settings] = None) -> WishlistRepository:
    """Repository for the configured storage backend."""
    settings = settings or get_settings()
    slot = create_slot(
        settings,
        WISHLIST_STORAGE_KEY,
        RedisKeys.wishlist_key(settings.session_id),
        ttl=TTL.WISHLIST,
    )
    return WishlistRepository(slot)
