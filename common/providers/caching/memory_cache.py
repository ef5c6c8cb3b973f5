import copy
import time
from typing import Any, Optional, Dict
from dataclasses import dataclass

from .interface import CacheInterface
from common.core.otel_exporter import get_logger

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """Represents a cached entry with expiration."""

    value: Any
    expires_at: Optional[float] = None

    def is_expired(self) -> bool:
        """Check if this entry has expired."""
        if self.expires_at is None:
            return False
        return time.monotonic() > self.expires_at


class MemoryCache(CacheInterface):
    """In-memory cache implementation for a single process."""

    def __init__(self):
        self._cache: Dict[str, CacheEntry] = {}
        logger.info("Memory cache provider initialized")

    def _live_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._cache.get(key)
        if entry is not None and entry.is_expired():
            del self._cache[key]
            return None
        return entry

    def _cleanup_expired(self) -> None:
        """Remove expired entries from cache."""
        expired_keys = [
            key for key, entry in self._cache.items() if entry.is_expired()
        ]

        for key in expired_keys:
            del self._cache[key]

        if expired_keys:
            logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")

    async def get(self, key: str) -> Optional[Any]:
        entry = self._live_entry(key)
        if entry is None:
            return None
        # Callers must not be able to mutate the cached copy
        return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        # Keys that are never read again would otherwise stay forever
        self._cleanup_expired()
        expires_at = time.monotonic() + ttl if ttl else None
        self._cache[key] = CacheEntry(value=copy.deepcopy(value), expires_at=expires_at)
        logger.debug(f"Cached key {key} with TTL {ttl}")
        return True

    async def delete(self, key: str) -> bool:
        if self._cache.pop(key, None) is not None:
            logger.debug(f"Deleted cache key {key}")
            return True
        return False

    async def exists(self, key: str) -> bool:
        return self._live_entry(key) is not None

    async def clear(self) -> bool:
        self._cache.clear()
        logger.info("Cleared all cache data")
        return True
