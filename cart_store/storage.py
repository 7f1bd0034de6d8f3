"""
storage.py - Persistent Cart Slot Backends

PURPOSE:
    The cart is mirrored to a single named slot in a key-value store so it
    survives process restarts. This module defines the slot interface and the
    backends that implement it.

BACKENDS:
    - RedisCartStorage: one Redis string key, optional TTL that resets on
      every write (abandoned carts expire on their own)
    - FileCartStorage: a local JSON file, replaced atomically on write
    - MemoryCartStorage: process-local slot, lost on exit

ERROR HANDLING:
    Backends raise StorageError on I/O failure. They do not log or retry;
    CartStore decides what a failure means (an empty cart on read, a logged
    warning on write).

Example Usage:
    ```python
    redis_client = redis.Redis(host="localhost", port=6379, db=0, decode_responses=True)
    storage = RedisCartStorage(redis_client, key="brightbuy_cart", ttl=86400)

    storage.write('[{"variantId": 1, ...}]')
    storage.read()    # '[{"variantId": 1, ...}]'
    storage.delete()
    storage.read()    # None
    ```
"""

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union

import redis

from cart_store.config import Settings
from cart_store.exceptions import StorageError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "brightbuy_cart"


class CartStorage(Protocol):
    """A single persistent slot holding the serialized cart items."""

    def read(self) -> Optional[str]:
        """Return the stored payload, or None if the slot is empty."""
        ...

    def write(self, data: str) -> None:
        ...

    def delete(self) -> None:
        ...


class RedisCartStorage:
    """Cart slot stored under one Redis key."""

    def __init__(self, redis_client: redis.Redis, key: str = DEFAULT_STORAGE_KEY, ttl: Optional[int] = None):
        self.redis = redis_client
        self.key = key
        self.ttl = ttl

    def read(self) -> Optional[str]:
        try:
            data = self.redis.get(self.key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to read cart from Redis key {self.key}: {e}") from e

        if data is None:
            return None
        # Clients created without decode_responses hand back bytes.
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return data

    def write(self, data: str) -> None:
        try:
            self.redis.set(self.key, data, ex=self.ttl)
        except redis.RedisError as e:
            raise StorageError(f"Failed to write cart to Redis key {self.key}: {e}") from e

    def delete(self) -> None:
        try:
            self.redis.delete(self.key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to delete Redis key {self.key}: {e}") from e

    def time_to_live(self) -> Optional[int]:
        """Seconds until the slot expires, or None if it has no expiry or does not exist."""
        try:
            ttl = self.redis.ttl(self.key)
        except redis.RedisError as e:
            raise StorageError(f"Failed to read TTL of Redis key {self.key}: {e}") from e
        return ttl if ttl is not None and ttl >= 0 else None


class FileCartStorage:
    """Cart slot stored as a JSON file on local disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read cart file {self.path}: {e}") from e

    def write(self, data: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Write next to the target and swap it in, so readers never see half a file.
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(data)
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write cart file {self.path}: {e}") from e

    def delete(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Failed to delete cart file {self.path}: {e}") from e


class MemoryCartStorage:
    """Cart slot held in process memory."""

    def __init__(self, initial: Optional[str] = None):
        self.data = initial

    def read(self) -> Optional[str]:
        return self.data

    def write(self, data: str) -> None:
        self.data = data

    def delete(self) -> None:
        self.data = None


def build_storage(settings: Settings) -> CartStorage:
    """Create the storage backend selected by settings.cart_storage_backend."""
    backend = settings.cart_storage_backend

    if backend == "redis":
        redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            decode_responses=True,
        )
        logger.info(f"Using Redis cart storage at {settings.redis_host}:{settings.redis_port} key {settings.cart_storage_key}")
        return RedisCartStorage(redis_client, key=settings.cart_storage_key, ttl=settings.cart_ttl)

    if backend == "file":
        logger.info(f"Using file cart storage at {settings.cart_file_path}")
        return FileCartStorage(settings.cart_file_path)

    if backend == "memory":
        logger.info("Using in-memory cart storage")
        return MemoryCartStorage()

    raise ValueError(f"Unknown cart storage backend: {backend}")
