"""Resilient execution of data-access operations.

Every call to the data store goes through ResilientExecutor. A failed attempt
is classified (see infrastructure.operations.classifiers) and then either:

- the session is refreshed and the operation retried after a short settle
  delay (expired credential), or
- the operation is retried after an exponential backoff delay (anything else),

until the attempt budget of ``max_retries + 1`` invocations is spent.

State transitions:
- Attempting(n) -> Succeeded: operation returns
- Attempting(n) -> Failed: operation fails and n == max_retries
- Attempting(n) -> RecoveringSession: auth error and n < max_retries
- RecoveringSession -> Attempting(n+1): refresh returned a session
- RecoveringSession -> Failed: refresh returned no session
- Attempting(n) -> BackingOff: other error and n < max_retries
- BackingOff -> Attempting(n+1): delay elapsed
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar, TYPE_CHECKING

import structlog

from infrastructure.auth.session import SessionProvider
from infrastructure.operations.classifiers import (
    classify_error,
    error_code,
    error_message,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind
from infrastructure.resilience.config import RetryPolicy
from infrastructure.resilience.models import ExecutorError, OperationKind

if TYPE_CHECKING:
    from infrastructure.idempotency.service import IdempotencyService

logger = structlog.get_logger()

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
Sleep = Callable[[float], Awaitable[Any]]


def calculate_backoff_delay(base_delay_ms: float, attempt: int) -> float:
    """Calculate the backoff delay before the next attempt.

    Args:
        base_delay_ms: Base delay in milliseconds
        attempt: Index of the attempt that just failed (0-indexed)

    Returns:
        Delay in milliseconds (base_delay_ms * 2^attempt)
    """
    return base_delay_ms * (2**attempt)


class ResilientExecutor:
    """Run async operations with bounded retry and session recovery.

    The executor holds no per-call state, so one instance can serve
    concurrent callers.

    Args:
        session_provider: Authentication collaborator used for refreshes
        policy: Retry policy (defaults to RetryPolicy())
        idempotency: Optional idempotency service for keyed writes
        sleep: Awaitable sleep taking seconds (injectable for tests)

    Example:
        executor = ResilientExecutor(session_provider, RetryPolicy())

        async def fetch():
            return await run_query(client.table("finance").select("*"))

        rows = await executor.execute(fetch)
        if rows is None:
            # operation did not complete
            ...
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        policy: Optional[RetryPolicy] = None,
        idempotency: Optional["IdempotencyService"] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._session_provider = session_provider
        self.policy = policy or RetryPolicy()
        self._idempotency = idempotency
        self._sleep = sleep
        self.log = logger.bind(component="resilient_executor")

    async def execute(
        self,
        operation: Operation[T],
        max_retries: Optional[int] = None,
        base_delay_ms: Optional[float] = None,
        *,
        kind: OperationKind = OperationKind.READ,
        idempotency_key: Optional[str] = None,
        operation_name: str = "operation",
    ) -> Optional[T]:
        """Execute an operation and return its result, or None on failure.

        All failure causes collapse into None. Use execute_result() to find
        out why an execution failed.

        Args:
            operation: Zero-argument coroutine function to run
            max_retries: Retries after the first attempt (policy default: 3)
            base_delay_ms: Base backoff delay (policy default: 1000ms)
            kind: How safe the operation is to repeat
            idempotency_key: Key under which a successful result is remembered
            operation_name: Name used in log events

        Returns:
            The operation's result, or None if it did not complete
        """
        result = await self.execute_result(
            operation,
            max_retries,
            base_delay_ms,
            kind=kind,
            idempotency_key=idempotency_key,
            operation_name=operation_name,
        )
        return result.unwrap_or_none()

    async def execute_result(
        self,
        operation: Operation[T],
        max_retries: Optional[int] = None,
        base_delay_ms: Optional[float] = None,
        *,
        kind: OperationKind = OperationKind.READ,
        idempotency_key: Optional[str] = None,
        operation_name: str = "operation",
    ) -> OperationResult:
        """Execute an operation and return a tagged OperationResult.

        Error codes on failure:
            RETRIES_EXHAUSTED (TRANSIENT_ERROR): every attempt failed
            AUTH_UNRECOVERABLE (UNAUTHORIZED): refresh returned no session
            OPERATION_ERROR (PERMANENT_ERROR): write failed, not retried

        Raises:
            ValueError: If max_retries is negative or base_delay_ms not positive
        """
        retries = self.policy.max_retries if max_retries is None else max_retries
        base_delay = (
            self.policy.base_delay_ms if base_delay_ms is None else base_delay_ms
        )
        if retries < 0:
            raise ValueError("max_retries must be non-negative")
        if base_delay <= 0:
            raise ValueError("base_delay_ms must be positive")

        log = self.log.bind(operation=operation_name, kind=kind.value)

        use_cache = idempotency_key is not None and self._idempotency is not None
        if use_cache:
            cached = self._idempotency.get(idempotency_key)
            if cached is not None:
                log.info("operation_idempotent_replay", idempotency_key=idempotency_key)
                return OperationResult.success(
                    data=cached.get("value"),
                    message=f"{operation_name} replayed from idempotency cache",
                )

        retry_transient = kind is not OperationKind.WRITE
        last_error: Optional[Exception] = None

        for attempt in range(retries + 1):
            attempts = attempt + 1
            try:
                value = await operation()
            except Exception as e:
                last_error = e
            else:
                if attempt > 0:
                    log.info("operation_retry_succeeded", attempt=attempts)
                if use_cache:
                    self._idempotency.set(idempotency_key, {"value": value})
                return OperationResult.success(
                    data=value,
                    message=f"{operation_name} succeeded",
                    attempts=attempts,
                )

            if attempt == retries:
                log.error(
                    "operation_retries_exhausted",
                    max_retries=retries,
                    attempts=attempts,
                    error=error_message(last_error),
                    error_code=error_code(last_error),
                )
                return OperationResult.transient_error(
                    error_message(last_error),
                    error_code=ExecutorError.EXHAUSTED.value,
                    attempts=attempts,
                    cause=last_error,
                )

            error_kind = classify_error(
                last_error,
                self.policy.auth_error_codes,
                self.policy.auth_message_markers,
            )

            if error_kind is ErrorKind.AUTH_EXPIRED:
                log.warning(
                    "auth_token_error_detected",
                    attempt=attempts,
                    error=error_message(last_error),
                    error_code=error_code(last_error),
                )
                try:
                    refreshed = await self._session_provider.refresh_session()
                except Exception as e:
                    # Contract says refresh never raises; keep going if it does
                    log.error("session_refresh_error", attempt=attempts, error=str(e))
                    continue

                if refreshed.session is None:
                    log.error("session_refresh_unavailable", attempt=attempts)
                    return OperationResult.unauthorized(
                        "Session could not be refreshed; sign-in required",
                        error_code=ExecutorError.AUTH_UNRECOVERABLE.value,
                        attempts=attempts,
                        cause=last_error,
                    )

                log.info(
                    "session_refreshed",
                    attempt=attempts,
                    settle_ms=self.policy.session_settle_ms,
                )
                await self._sleep(self.policy.session_settle_ms / 1000)
                continue

            if not retry_transient:
                log.error(
                    "write_failed_not_retried",
                    attempt=attempts,
                    error=error_message(last_error),
                    error_code=error_code(last_error),
                )
                return OperationResult.permanent_error(
                    error_message(last_error),
                    error_code=ExecutorError.OPERATION_ERROR.value,
                    attempts=attempts,
                    cause=last_error,
                )

            delay_ms = calculate_backoff_delay(base_delay, attempt)
            log.warning(
                "operation_retrying",
                attempt=attempts,
                max_retries=retries,
                delay_ms=delay_ms,
                error=error_message(last_error),
            )
            await self._sleep(delay_ms / 1000)

        # Every path inside the loop returns on the final attempt
        return OperationResult.transient_error(
            error_message(last_error) if last_error else "Unknown error",
            error_code=ExecutorError.EXHAUSTED.value,
            attempts=retries + 1,
            cause=last_error,
        )


async def retry_with_backoff(
    operation: Operation[T],
    max_retries: int = 3,
    base_delay_ms: float = 1000,
    **kwargs: Any,
) -> Optional[T]:
    """Execute an operation with the application-scoped executor.

    Args:
        operation: Zero-argument coroutine function to run
        max_retries: Retries after the first attempt
        base_delay_ms: Base backoff delay in milliseconds
        **kwargs: kind, idempotency_key, operation_name (see execute())

    Returns:
        The operation's result, or None if it did not complete
    """
    # Import here to avoid circular dependency
    from infrastructure.services.providers import get_executor

    return await get_executor().execute(
        operation, max_retries, base_delay_ms, **kwargs
    )
