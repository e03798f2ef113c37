"""Retry policy infrastructure settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class RetrySettings(InfrastructureSettings):
    """Retry policy applied to every data-access call.

    Environment Variables:
        RETRY_MAX_RETRIES: Retries after the first attempt (default: 3)
        RETRY_BASE_DELAY_MS: Base exponential backoff delay (default: 1000ms)
        RETRY_SESSION_SETTLE_MS: Wait after a session refresh (default: 500ms)
        RETRY_AUTH_ERROR_CODES: JSON list of data-store error codes that mean
            the session expired (default: ["PGRST301"])

    Exponential Backoff:
        Delay calculation: base_delay_ms * (2 ^ attempt)

        Example with defaults (base=1000ms, max_retries=3):
            Attempt 0 fails: wait 1000ms
            Attempt 1 fails: wait 2000ms
            Attempt 2 fails: wait 4000ms
            Attempt 3 fails: give up

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        max_retries = settings.retry.max_retries
        base_delay_ms = settings.retry.base_delay_ms
        ```
    """

    max_retries: int = Field(
        default=3,
        alias="RETRY_MAX_RETRIES",
        description="Retries allowed after the first attempt",
    )
    base_delay_ms: int = Field(
        default=1000,
        alias="RETRY_BASE_DELAY_MS",
        description="Base delay for exponential backoff (milliseconds)",
    )
    session_settle_ms: int = Field(
        default=500,
        alias="RETRY_SESSION_SETTLE_MS",
        description="Delay after a successful session refresh (milliseconds)",
    )
    auth_error_codes: List[str] = Field(
        default_factory=lambda: ["PGRST301"],
        alias="RETRY_AUTH_ERROR_CODES",
        description="Error codes treated as an expired authentication context",
    )
