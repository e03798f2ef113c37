"""Storage interface for remembered operation results.

A keyed write that succeeds stores ``{"value": <response data>}`` under its
idempotency key. Keys embed the user ID (see IdempotencyKeyBuilder), so one
cache is shared by every user of the process.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, TypedDict


class CachedResult(TypedDict):
    value: Any


class CacheStats(TypedDict):
    backend: str
    entries: int
    hits: int
    misses: int


class IdempotencyCache(ABC):
    """Where the executor remembers results of successful keyed writes."""

    @abstractmethod
    def get(self, key: str) -> Optional[CachedResult]:
        """Return the remembered result, or None if unknown or expired."""

    @abstractmethod
    def set(self, key: str, response: CachedResult, ttl_seconds: int) -> None:
        """Remember ``response`` for ``ttl_seconds``; a positive TTL is required."""

    @abstractmethod
    def purge_expired(self) -> int:
        """Drop expired results and return how many were dropped."""

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def get_stats(self) -> CacheStats:
        pass
