"""Wishlist package: saved product ids and their persistence."""
from .service import WishlistStore, create_wishlist_store
from .storage import WishlistRepository, in_memory_wishlist_repository

__all__ = [
    "WishlistStore",
    "create_wishlist_store",
    "WishlistRepository",
    "in_memory_wishlist_repository",
]
