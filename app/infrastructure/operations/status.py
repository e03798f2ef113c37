"""Operation status enumeration.

Status codes for operation results, used to classify the outcome of
data-access calls so callers can branch on cause instead of parsing logs.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, contention, retries exhausted)
        PERMANENT_ERROR: Non-retryable error (write failure without idempotency key)
        UNAUTHORIZED: Session expired and could not be refreshed
        NOT_FOUND: Resource not found
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"


class ErrorKind(Enum):
    """Failure classes recognised by the retry policy.

    Attributes:
        AUTH_EXPIRED: The data store rejected the credential; recoverable by
            refreshing the session
        TRANSIENT: Any other failure; recoverable only by retrying after a delay
    """

    AUTH_EXPIRED = "auth_expired"
    TRANSIENT = "transient"
