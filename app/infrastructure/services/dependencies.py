"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.clients.supabase import (
    SupabaseClientManager,
    SupabaseSessionProvider,
)
from infrastructure.resilience.executor import ResilientExecutor
from infrastructure.services.providers import (
    get_settings,
    get_supabase_client_manager,
    get_session_provider,
    get_executor,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Supabase client manager dependency
SupabaseClientManagerDep = Annotated[
    SupabaseClientManager, Depends(get_supabase_client_manager)
]

# Session provider dependency
SessionProviderDep = Annotated[SupabaseSessionProvider, Depends(get_session_provider)]

# Resilient executor dependency - wraps data-access calls with retry
ExecutorDep = Annotated[ResilientExecutor, Depends(get_executor)]

__all__ = [
    "SettingsDep",
    "SupabaseClientManagerDep",
    "SessionProviderDep",
    "ExecutorDep",
]
