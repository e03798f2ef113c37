"""Resilient executor models.

Enumerations describing what kind of operation is being retried and why an
execution gave up.
"""

from enum import Enum


class OperationKind(Enum):
    """How safe an operation is to repeat.

    Values:
        READ: Select queries; always safe to retry
        IDEMPOTENT_WRITE: Updates/deletes scoped by primary key; repeating
            them leaves the same end state
        WRITE: Inserts and other writes that could be applied twice; transient
            failures are never retried. An idempotency key only replays a
            remembered success
    """

    READ = "read"
    IDEMPOTENT_WRITE = "idempotent_write"
    WRITE = "write"


class ExecutorError(Enum):
    """Cause of a failed execution, used as the result's error_code.

    Values:
        EXHAUSTED: Every attempt failed
        AUTH_UNRECOVERABLE: The session expired and could not be refreshed
        OPERATION_ERROR: A non-idempotent write failed and was not retried
    """

    EXHAUSTED = "RETRIES_EXHAUSTED"
    AUTH_UNRECOVERABLE = "AUTH_UNRECOVERABLE"
    OPERATION_ERROR = "OPERATION_ERROR"
