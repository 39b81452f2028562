"""
Short-lived read-through cache for booking store reads.

Entries expire after a fixed TTL measured on a monotonic clock. A loader
that raises is not cached, so an outage is retried on the next request.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Hashable

logger = logging.getLogger(__name__)


class ReadThroughCache:
    """Per-key TTL cache in front of an async loader.

    A TTL of 0 disables storage: every call goes to the loader.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: Hashable) -> Any:
        """Return the cached value or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug("Cache expired: %s", key)
            return None
        return value

    def set(self, key: Hashable, value: Any) -> None:
        if self._ttl <= 0:
            return
        self._entries[key] = (self._clock() + self._ttl, value)

    async def get_or_load(self, key: Hashable, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return a fresh cached value, or await the loader and cache its result."""
        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache HIT: %s", key)
            return cached
        logger.debug("Cache MISS: %s", key)
        value = await loader()
        self.set(key, value)
        return value

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
