"""Supabase integration settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SupabaseSettings(IntegrationSettings):
    """Supabase project configuration.

    Environment Variables:
        SUPABASE_URL: Project URL (required)
        SUPABASE_ANON_KEY: Public anon key used by user-scoped clients (required)
        SUPABASE_SERVICE_ROLE_KEY: Service role key for admin clients (optional)
        APP_NAME: Value sent in the x-application-name header

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        url = settings.supabase.SUPABASE_URL
        missing = settings.supabase.missing_required()
        ```
    """

    SUPABASE_URL: str = Field(default="", alias="SUPABASE_URL")
    SUPABASE_ANON_KEY: str = Field(default="", alias="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: str | None = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    APP_NAME: str = Field(default="kakeibo-app", alias="APP_NAME")

    def missing_required(self) -> List[str]:
        """Return the names of required variables that are not set."""
        missing = []
        if not self.SUPABASE_URL:
            missing.append("SUPABASE_URL")
        if not self.SUPABASE_ANON_KEY:
            missing.append("SUPABASE_ANON_KEY")
        return missing
