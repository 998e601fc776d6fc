"""
Redis Module - Upstash Redis client

Provides a singleton synchronous Upstash Redis client used as a remote
durable slot for cart and wishlist state.
"""

from typing import Optional

from upstash_redis import Redis

from kalspire.config import CART_STORAGE_KEY, WISHLIST_STORAGE_KEY, Settings, get_settings
from kalspire.errors import ERROR_REDIS_NOT_CONFIGURED


_redis_client: Optional[Redis] = None


def get_redis_sync(settings: Optional[Settings] = None) -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        settings = settings or get_settings()
        if not settings.redis_configured:
            raise ValueError(ERROR_REDIS_NOT_CONFIGURED)
        _redis_client = Redis(url=settings.redis_url, token=settings.redis_token)

    return _redis_client


def reset_redis_client() -> None:
    """Drop the cached client (tests, credential rotation)."""
    global _redis_client
    _redis_client = None


class RedisKeys:
    """Redis key prefixes for client state."""

    CART = f"{CART_STORAGE_KEY}:"  # cart-storage:{session_id}
    WISHLIST = f"{WISHLIST_STORAGE_KEY}:"  # wishlist-storage:{session_id}

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART}{session_id}"

    @staticmethod
    def wishlist_key(session_id: str) -> str:
        return f"{RedisKeys.WISHLIST}{session_id}"


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    CART = 2592000  # 30 days
    WISHLIST = 7776000  # 90 days
