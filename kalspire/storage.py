"""
Durable slots - named places that hold one serialized JSON document.

Backends:
- MemorySlot: process-local, used by tests and the "memory" backend
- FileSlot: client-local JSON file that survives restarts
- RedisSlot: Upstash Redis key with TTL
"""
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from kalspire.config import BACKEND_FILE, BACKEND_MEMORY, BACKEND_REDIS, Settings
from kalspire.errors import ERROR_UNKNOWN_BACKEND, CartStorageError
from kalspire.logging import get_logger

logger = get_logger(__name__)


class Slot(Protocol):
    """A single durable key holding a raw JSON string."""

    name: str

    def read(self) -> Optional[str]: ...

    def write(self, raw: str) -> None: ...

    def delete(self) -> None: ...


class MemorySlot:
    """Slot kept in memory."""

    def __init__(self, name: str, raw: Optional[str] = None):
        self.name = name
        self.raw = raw

    def read(self) -> Optional[str]:
        return self.raw

    def write(self, raw: str) -> None:
        self.raw = raw

    def delete(self) -> None:
        self.raw = None


class FileSlot:
    """Slot stored as `<directory>/<name>.json`."""

    def __init__(self, name: str, directory: Path):
        self.name = name
        self.path = Path(directory) / f"{name}.json"

    def read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read slot %s: %s", self.path, e)
            raise CartStorageError(key=self.name) from e

    def write(self, raw: str) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file then swap, so readers never see half a document
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(raw)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write slot %s: %s", self.path, e)
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise CartStorageError(key=self.name) from e

    def delete(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to delete slot %s: %s", self.path, e)
            raise CartStorageError(key=self.name) from e


class RedisSlot:
    """Slot stored under a Redis key with a TTL refreshed on every write."""

    def __init__(self, name: str, redis, ttl: Optional[int] = None):
        self.name = name
        self.redis = redis
        self.ttl = ttl

    def read(self) -> Optional[str]:
        try:
            data = self.redis.get(self.name)
        except Exception as e:
            logger.error("Failed to read %s from Redis: %s", self.name, e)
            raise CartStorageError(key=self.name) from e
        if data is None:
            return None
        return data.decode("utf-8") if isinstance(data, bytes) else str(data)

    def write(self, raw: str) -> None:
        try:
            if self.ttl:
                self.redis.set(self.name, raw, ex=self.ttl)
            else:
                self.redis.set(self.name, raw)
        except Exception as e:
            logger.error("Failed to write %s to Redis: %s", self.name, e)
            raise CartStorageError(key=self.name) from e

    def delete(self) -> None:
        try:
            self.redis.delete(self.name)
        except Exception as e:
            logger.error("Failed to delete %s from Redis: %s", self.name, e)
            raise CartStorageError(key=self.name) from e


def create_slot(settings: Settings, name: str, redis_key: str, ttl: Optional[int] = None) -> Slot:
    """Build the slot for the configured backend.

    Args:
        settings: Resolved settings
        name: Slot name for file and memory backends
        redis_key: Full key for the Redis backend
        ttl: Redis TTL in seconds
    """
    backend = settings.storage_backend
    if backend == BACKEND_FILE:
        return FileSlot(name, settings.data_dir)
    if backend == BACKEND_MEMORY:
        return MemorySlot(name)
    if backend == BACKEND_REDIS:
        from kalspire.db import get_redis_sync
        return RedisSlot(redis_key, get_redis_sync(settings), ttl=ttl)
    raise ValueError(f"{ERROR_UNKNOWN_BACKEND}: {backend}")
