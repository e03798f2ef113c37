"""Operation result dataclass.

Uniform result type returned by the resilient executor and the domain
services, including status, data, error code and the failure cause.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- optional payload (row, list of rows, bool, ...)
        error_code: Optional[str] -- optional machine error code
        retry_after: Optional[int] -- seconds until retry when rate-limited
        attempts: int -- number of times the operation was invoked
        cause: Optional[BaseException] -- last exception raised by the operation
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None
    attempts: int = 0
    cause: Optional[BaseException] = None

    @property
    def is_success(self) -> bool:
        """Helper property to check if operation was successful.

        Returns:
            True if status is SUCCESS, False otherwise
        """
        return self.status == OperationStatus.SUCCESS

    def unwrap_or_none(self) -> Optional[Any]:
        """Return the payload on success and None on any failure."""
        return self.data if self.is_success else None

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok", attempts: int = 0
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data.

        Args:
            data: Optional payload to include with the result
            message: Human-friendly success message
            attempts: Number of invocations it took to succeed

        Returns:
            OperationResult with SUCCESS status
        """
        return cls(
            status=OperationStatus.SUCCESS,
            message=message,
            data=data,
            attempts=attempts,
        )

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
        attempts: int = 0,
        cause: Optional[BaseException] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code
            retry_after: Optional seconds until retry (for rate limiting)
            data: Optional payload to include with the error
            attempts: Number of invocations made before giving up
            cause: Exception that ended the last attempt

        Returns:
            OperationResult with specified error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
            data=data,
            attempts=attempts,
            cause=cause,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        attempts: int = 0,
        cause: Optional[BaseException] = None,
    ) -> "OperationResult":
        """Create a transient (retryable) error result.

        Use for failures that may succeed on a later call, such as:
        - Network timeouts
        - Lock contention
        - Retry budget exhausted

        Returns:
            OperationResult with TRANSIENT_ERROR status
        """
        return cls.error(
            OperationStatus.TRANSIENT_ERROR,
            message,
            error_code,
            attempts=attempts,
            cause=cause,
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        attempts: int = 0,
        cause: Optional[BaseException] = None,
    ) -> "OperationResult":
        """Create a permanent (non-retryable) error result.

        Use for failures that must not be retried automatically, such as a
        failed insert without an idempotency key.

        Returns:
            OperationResult with PERMANENT_ERROR status
        """
        return cls.error(
            OperationStatus.PERMANENT_ERROR,
            message,
            error_code,
            attempts=attempts,
            cause=cause,
        )

    @classmethod
    def unauthorized(
        cls,
        message: str,
        error_code: Optional[str] = None,
        attempts: int = 0,
        cause: Optional[BaseException] = None,
    ) -> "OperationResult":
        """Create an UNAUTHORIZED result (session could not be recovered)."""
        return cls.error(
            OperationStatus.UNAUTHORIZED,
            message,
            error_code,
            attempts=attempts,
            cause=cause,
        )
