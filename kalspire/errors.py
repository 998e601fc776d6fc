"""
Common Error Constants

Centralized error messages to avoid string duplication.
"""

# Storage errors
ERROR_CART_STORAGE_UNAVAILABLE = "Cart storage unavailable"
ERROR_CORRUPTED_SLOT = "Corrupted storage slot"
ERROR_UNKNOWN_BACKEND = "Unknown storage backend"

# Configuration errors
ERROR_REDIS_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"


class CartStorageError(Exception):
    """Raised by a storage backend when a slot cannot be written."""

    def __init__(self, message: str = ERROR_CART_STORAGE_UNAVAILABLE, key: str | None = None):
        self.key = key
        super().__init__(f"{message}: {key}" if key else message)
