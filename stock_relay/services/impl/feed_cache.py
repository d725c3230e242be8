"""Feed cache - short TTL memoization of the Back in Stock CSV feed"""
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from stock_relay.core.logging import logger

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    value: T
    expires_at: float


class FeedCache(Generic[T]):
    """Single-value TTL cache with an injectable clock

    Shared process-wide; concurrent loaders may both fetch and the last
    writer wins. No locking: staleness is the only risk.
    """

    def __init__(self, ttl_seconds: float = 240, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[CacheEntry[T]] = None

    def get(self) -> Optional[T]:
        """Cached value, or None when empty or expired"""
        entry = self._entry
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            logger.debug("[FEED] Cache expired")
            return None
        return entry.value

    def set(self, value: T) -> None:
        self._entry = CacheEntry(value=value, expires_at=self._clock() + self.ttl_seconds)

    def invalidate(self) -> None:
        self._entry = None

    async def get_or_load(self, loader: Callable[[], Awaitable[T]]) -> tuple[T, bool]:
        """Return the cached value or load and cache a fresh one

        Args:
            loader: async callable producing a fresh value

        Returns:
            (value, served_from_cache)
        """
        cached = self.get()
        if cached is not None:
            logger.info("[FEED] Cache hit")
            return cached, True

        logger.info("[FEED] Cache miss, loading feed")
        value = await loader()
        self.set(value)
        return value, False


class FeedService:
    """Serves feed rows through the cache"""

    def __init__(self, client, cache: FeedCache[Any]):
        self.client = client
        self.cache = cache

    async def get_rows(self) -> tuple[list[dict[str, Any]], bool]:
        return await self.cache.get_or_load(self.client.fetch_rows)
