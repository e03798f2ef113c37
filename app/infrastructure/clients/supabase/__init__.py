"""Supabase data-store and auth binding.

Exports:
    SupabaseClientManager: Lazily creates and shares the async client
    create_supabase_client: Build an async client from settings
    SupabaseSessionProvider: SessionProvider over supabase auth
    UserClientManager: Client acting for one signed-in user (per request)
    RequestSessionProvider: SessionProvider for one API request
    DataStoreError: Classified data-store failure
    run_query: Execute a query builder, raising DataStoreError on failure
    to_data_store_error: Convert an exception into DataStoreError
"""

from infrastructure.clients.supabase.client import (
    SupabaseClientManager,
    UserClientManager,
    create_supabase_client,
)
from infrastructure.clients.supabase.errors import (
    DataStoreError,
    run_query,
    to_data_store_error,
)
from infrastructure.clients.supabase.session_provider import (
    RequestSessionProvider,
    SupabaseSessionProvider,
    session_from_supabase,
)

__all__ = [
    "SupabaseClientManager",
    "UserClientManager",
    "create_supabase_client",
    "SupabaseSessionProvider",
    "RequestSessionProvider",
    "session_from_supabase",
    "DataStoreError",
    "run_query",
    "to_data_store_error",
]
