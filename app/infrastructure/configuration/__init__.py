"""Infrastructure configuration module - public API.

This module provides centralized configuration management for Kakeibo
using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    SupabaseSettings: Hosted backend settings class
    RetrySettings: Retry policy settings class
    IdempotencySettings: Idempotency cache settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    # Access settings
    supabase_url = settings.supabase.SUPABASE_URL
    base_delay_ms = settings.retry.base_delay_ms

    # Check environment
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.integrations import SupabaseSettings
from infrastructure.configuration.infrastructure import (
    IdempotencySettings,
    RetrySettings,
)

__all__ = ["Settings", "SupabaseSettings", "RetrySettings", "IdempotencySettings"]
