"""Infrastructure modules for the Kakeibo application.

Centralized infrastructure components:
- configuration: Settings management (Settings, SupabaseSettings, RetrySettings)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Operation results and error classification
- resilience: Resilient executor (retry, backoff, session recovery)
- auth: Sessions, session provider protocol, auth redirects
- clients: Supabase data-store and auth binding
- idempotency: Idempotency keys and cache for writes
- services: Dependency injection providers (get_settings, get_executor)
"""
