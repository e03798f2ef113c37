"""Kakeibo configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import SupabaseSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import (
    IdempotencySettings,
    RetrySettings,
)


class Settings(BaseSettings):
    """Kakeibo configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: Hosted backend configuration (Supabase)
    - **Infrastructure**: Core system configuration (retry, idempotency)

    Environment Variables:
        ENVIRONMENT: Deployment environment (development, staging, production)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        supabase_url = settings.supabase.SUPABASE_URL
        max_retries = settings.retry.max_retries

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    supabase: SupabaseSettings

    # Infrastructure settings
    idempotency: IdempotencySettings
    retry: RetrySettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "supabase": SupabaseSettings,
            # Infrastructure
            "idempotency": IdempotencySettings,
            "retry": RetrySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
