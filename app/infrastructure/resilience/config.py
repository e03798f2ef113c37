"""Retry policy configuration.

This module defines the policy applied by the resilient executor.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple, TYPE_CHECKING

from infrastructure.operations.classifiers import (
    DEFAULT_AUTH_ERROR_CODES,
    DEFAULT_AUTH_MESSAGE_MARKERS,
)

if TYPE_CHECKING:
    from infrastructure.configuration import RetrySettings


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry behavior of data-access calls.

    Attributes:
        max_retries: Retries allowed after the first attempt
        base_delay_ms: Base delay for exponential backoff (first retry)
        session_settle_ms: Fixed wait after a successful session refresh
        auth_error_codes: Error codes meaning the auth context expired
        auth_message_markers: Message substrings meaning the credential was
            rejected, for providers without structured codes

    Example:
        # Default policy: 3 retries, 1s/2s/4s backoff, 500ms settle
        policy = RetryPolicy()

        # Faster policy for interactive screens
        policy = RetryPolicy(max_retries=2, base_delay_ms=100)
    """

    max_retries: int = 3
    base_delay_ms: float = 1000
    session_settle_ms: float = 500
    auth_error_codes: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_AUTH_ERROR_CODES)
    )
    auth_message_markers: Tuple[str, ...] = DEFAULT_AUTH_MESSAGE_MARKERS

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.base_delay_ms <= 0:
            raise ValueError("base_delay_ms must be positive")
        if self.session_settle_ms < 0:
            raise ValueError("session_settle_ms must be non-negative")

    @classmethod
    def from_settings(cls, retry_settings: "RetrySettings") -> "RetryPolicy":
        """Build a policy from the RETRY_* environment settings."""
        return cls(
            max_retries=retry_settings.max_retries,
            base_delay_ms=retry_settings.base_delay_ms,
            session_settle_ms=retry_settings.session_settle_ms,
            auth_error_codes=frozenset(retry_settings.auth_error_codes),
        )
