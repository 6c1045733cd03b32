"""
In-memory TTL cache for computed predictions.

The cache is an explicit object created once at application start and passed
to the prediction engine; it holds no module-level state.
"""
import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import structlog

logger = structlog.get_logger()


@dataclass
class CacheEntry:
    """Cache entry with metadata."""
    data: Any
    expires_at: float
    created_at: float
    access_count: int = 0
    last_accessed: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        """Check if cache entry is expired."""
        return now > self.expires_at

    def touch(self, now: float):
        """Update access metadata."""
        self.access_count += 1
        self.last_accessed = now


class CacheKeyBuilder:
    """Helper for building consistent cache keys."""

    @staticmethod
    def user_prefix(user_id: str) -> str:
        """Prefix shared by every prediction key of a user."""
        return f"prediction:{user_id}:"

    @staticmethod
    def prediction_key(user_id: str, model_type: str, periods: int) -> str:
        """Build the key of one (user, model, horizon) forecast."""
        return f"{CacheKeyBuilder.user_prefix(user_id)}{model_type}:{periods}"


class PredictionCache:
    """In-memory cache with TTL and size limits."""

    def __init__(
        self,
        default_ttl: int = 24 * 3600,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.time
    ):
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock

        self._cache: Dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()

        # Statistics
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache, evicting it if it has expired."""
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self.misses += 1
                return None

            now = self._clock()
            if entry.is_expired(now):
                del self._cache[key]
                self.misses += 1
                self.evictions += 1
                logger.debug("Cache entry expired", key=key)
                return None

            entry.touch(now)
            self.hits += 1
            return entry.data

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value in cache."""
        async with self._lock:
            now = self._clock()
            ttl = self.default_ttl if ttl is None else ttl

            self._purge_expired(now)
            if key not in self._cache and len(self._cache) >= self.max_entries:
                self._evict_oldest()

            self._cache[key] = CacheEntry(
                data=value,
                expires_at=now + ttl,
                created_at=now
            )

    async def delete(self, key: str) -> bool:
        """Delete value from cache."""
        async with self._lock:
            return self._cache.pop(key, None) is not None

    async def invalidate_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with ``prefix``."""
        async with self._lock:
            keys = [key for key in self._cache if key.startswith(prefix)]
            for key in keys:
                del self._cache[key]

        if keys:
            logger.info("Cache entries invalidated", prefix=prefix, count=len(keys))
        return len(keys)

    async def purge_expired(self) -> int:
        """Remove all expired entries."""
        async with self._lock:
            return self._purge_expired(self._clock())

    async def clear(self):
        """Clear all cache entries."""
        async with self._lock:
            self._cache.clear()

    def size(self) -> int:
        return len(self._cache)

    async def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        async with self._lock:
            total_requests = self.hits + self.misses
            hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0

            return {
                "entries": len(self._cache),
                "max_entries": self.max_entries,
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate_percent": round(hit_rate, 2),
                "evictions": self.evictions
            }

    def _purge_expired(self, now: float) -> int:
        expired_keys = [key for key, entry in self._cache.items() if entry.is_expired(now)]
        for key in expired_keys:
            del self._cache[key]

        if expired_keys:
            self.evictions += len(expired_keys)
            logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")
        return len(expired_keys)

    def _evict_oldest(self):
        """Evict the least recently used entry."""
        if not self._cache:
            return

        lru_key = min(
            self._cache.keys(),
            key=lambda k: self._cache[k].last_accessed or self._cache[k].created_at
        )
        del self._cache[lru_key]
        self.evictions += 1
