"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.idempotency import IdempotencySettings
from infrastructure.configuration.infrastructure.retry import RetrySettings

__all__ = [
    "IdempotencySettings",
    "RetrySettings",
]
