"""In-process idempotency cache with per-entry expiry."""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from infrastructure.idempotency.cache import CachedResult, CacheStats, IdempotencyCache
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class InMemoryCache(IdempotencyCache):
    """Thread-safe dictionary cache with TTL.

    Expired entries are dropped lazily on read and by ``purge_expired()``.

    Args:
        clock: Monotonic clock returning seconds (injectable for tests)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: Dict[str, Tuple[float, CachedResult]] = {}
        self._clock = clock
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[CachedResult]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            expires_at, response = entry
            if expires_at <= self._clock():
                del self._entries[key]
                self._misses += 1
                logger.debug("idempotency_entry_expired", key=key)
                return None
            self._hits += 1
            return response

    def set(self, key: str, response: CachedResult, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        with self._lock:
            self._entries[key] = (self._clock() + ttl_seconds, response)

    def purge_expired(self) -> int:
        """Remove expired entries and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, (exp, _) in self._entries.items() if exp <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> CacheStats:
        with self._lock:
            return {
                "backend": "memory",
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
