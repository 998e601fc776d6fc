"""
Kalspire Storefront Core

This package contains the client-side state of the storefront:
- config: Environment-driven settings
- db: Upstash Redis client
- cart: Cart line items, reducer, persistence and store
- wishlist: Saved product ids
- services: Catalog models and money helpers

Note: Imports are lazy so that importing the package does not
configure storage backends.
"""

__all__ = [
    "CartStore",
    "WishlistStore",
    "create_cart_store",
    "create_wishlist_store",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartStore":
        from kalspire.cart import CartStore
        return CartStore
    elif name == "create_cart_store":
        from kalspire.cart import create_cart_store
        return create_cart_store
    elif name == "WishlistStore":
        from kalspire.wishlist import WishlistStore
        return WishlistStore
    elif name == "create_wishlist_store":
        from kalspire.wishlist import create_wishlist_store
        return create_wishlist_store
    raise AttributeError(f"module 'kalspire' has no attribute '{name}'")
