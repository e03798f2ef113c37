"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    SupabaseClientManagerDep,
    SessionProviderDep,
    ExecutorDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_retry_policy,
    get_supabase_client_manager,
    get_session_provider,
    get_idempotency_service,
    get_executor,
)

__all__ = [
    "SettingsDep",
    "SupabaseClientManagerDep",
    "SessionProviderDep",
    "ExecutorDep",
    "get_settings",
    "get_retry_policy",
    "get_supabase_client_manager",
    "get_session_provider",
    "get_idempotency_service",
    "get_executor",
]
