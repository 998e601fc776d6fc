"""
Storefront client configuration.

Values come from environment variables; a local .env file is loaded first
when present.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Fixed slot names for client-local state
CART_STORAGE_KEY = "cart-storage"
WISHLIST_STORAGE_KEY = "wishlist-storage"

# Storage backends
BACKEND_FILE = "file"
BACKEND_REDIS = "redis"
BACKEND_MEMORY = "memory"

DEFAULT_DATA_DIR = Path.home() / ".kalspire"


@dataclass(frozen=True)
class Settings:
    """Resolved client settings."""
    storage_backend: str = BACKEND_FILE
    data_dir: Path = DEFAULT_DATA_DIR
    session_id: str = "local"
    redis_url: str = ""
    redis_token: str = ""

    @property
    def redis_configured(self) -> bool:
        return bool(self.redis_url and self.redis_token)


def get_settings() -> Settings:
    """Build settings from the current environment."""
    backend = os.environ.get("KALSPIRE_STORAGE_BACKEND", BACKEND_FILE).strip().lower()
    data_dir = os.environ.get("KALSPIRE_DATA_DIR")

    return Settings(
        storage_backend=backend or BACKEND_FILE,
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        session_id=os.environ.get("KALSPIRE_SESSION_ID", "local"),
        redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
        redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
    )
