"""Cart package: line items, reducer, persistence, and store."""
from .models import CartLineItem, LineItemKey, matches
from .service import CartStore, create_cart_store
from .storage import (
    CartRepository,
    FileCartRepository,
    InMemoryCartRepository,
    RedisCartRepository,
    dump_cart,
    load_cart,
)

__all__ = [
    "CartLineItem",
    "LineItemKey",
    "matches",
    "CartStore",
    "create_cart_store",
    "CartRepository",
    "FileCartRepository",
    "InMemoryCartRepository",
    "RedisCartRepository",
    "dump_cart",
    "load_cart",
]
