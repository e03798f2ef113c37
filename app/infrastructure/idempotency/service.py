"""Idempotency service for dependency injection.

Provides a class-based interface to the idempotency cache so the resilient
executor can remember successful writes by key.
"""

from typing import Optional, TYPE_CHECKING

from infrastructure.idempotency.cache import CachedResult, CacheStats

if TYPE_CHECKING:
    from infrastructure.idempotency.cache import IdempotencyCache
    from infrastructure.configuration import Settings


class IdempotencyService:
    """Class-based idempotency service.

    Wraps an IdempotencyCache with the configured TTL.

    Usage:
        from infrastructure.services.providers import get_idempotency_service

        service = get_idempotency_service()
        cached = service.get(key)
        if cached is None:
            row = await insert_row()
            service.set(key, {"value": row})
    """

    def __init__(
        self, settings: "Settings", cache: Optional["IdempotencyCache"] = None
    ):
        """Initialize idempotency service.

        Args:
            settings: Settings instance (required, passed from provider).
            cache: Optional pre-configured IdempotencyCache instance.
                  If not provided, creates an InMemoryCache.
        """
        if cache is None:
            from infrastructure.idempotency.memory import InMemoryCache

            cache = InMemoryCache()

        self._cache = cache
        self._ttl_seconds = settings.idempotency.IDEMPOTENCY_TTL_SECONDS

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def get(self, key: str) -> Optional[CachedResult]:
        """Get cached entry for idempotency key, or None if absent/expired."""
        return self._cache.get(key)

    def set(
        self, key: str, response: CachedResult, ttl_seconds: Optional[int] = None
    ) -> None:
        """Cache an entry for the given idempotency key.

        Args:
            key: Idempotency key
            response: Entry to cache
            ttl_seconds: Time-to-live in seconds (defaults to the configured TTL)
        """
        self._cache.set(key, response, ttl_seconds or self._ttl_seconds)

    def clear(self) -> None:
        """Clear all cached entries. Primarily intended for testing."""
        self._cache.clear()

    def get_stats(self) -> CacheStats:
        return self._cache.get_stats()

    @property
    def cache(self) -> "IdempotencyCache":
        """Underlying IdempotencyCache instance."""
        return self._cache
