"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.clients.supabase import (
    SupabaseClientManager,
    SupabaseSessionProvider,
)
from infrastructure.idempotency import IdempotencyService
from infrastructure.resilience.config import RetryPolicy
from infrastructure.resilience.executor import ResilientExecutor


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_retry_policy() -> RetryPolicy:
    """Get the retry policy built from RETRY_* settings."""
    return RetryPolicy.from_settings(get_settings().retry)


@lru_cache
def get_supabase_client_manager() -> SupabaseClientManager:
    """Get the application-scoped Supabase client manager.

    The client itself is created on first use, inside the event loop.
    """
    return SupabaseClientManager(get_settings().supabase)


@lru_cache
def get_session_provider() -> SupabaseSessionProvider:
    """Get the application-scoped session provider."""
    return SupabaseSessionProvider(get_supabase_client_manager())


@lru_cache
def get_idempotency_service() -> IdempotencyService:
    """Get the application-scoped idempotency service (in-memory cache)."""
    return IdempotencyService(settings=get_settings())


@lru_cache
def get_executor() -> ResilientExecutor:
    """
    Get the application-scoped resilient executor.

    Returns:
        ResilientExecutor: Executor wired with the session provider, the retry
        policy from settings and the idempotency service.

    Usage:
        @router.get("/transactions")
        async def list_transactions(executor: ExecutorDep):
            return await executor.execute(fetch_transactions)
    """
    return ResilientExecutor(
        session_provider=get_session_provider(),
        policy=get_retry_policy(),
        idempotency=get_idempotency_service(),
    )
