"""Idempotency infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class IdempotencySettings(InfrastructureSettings):
    """Idempotency cache configuration for preventing duplicate writes.

    Environment Variables:
        IDEMPOTENCY_TTL_SECONDS: Time-to-live for cached results (default: 3600s = 1h)

    Example:
        ```python
        from infrastructure.services import get_settings

        ttl = get_settings().idempotency.IDEMPOTENCY_TTL_SECONDS
        ```
    """

    IDEMPOTENCY_TTL_SECONDS: int = Field(default=3600, alias="IDEMPOTENCY_TTL_SECONDS")
