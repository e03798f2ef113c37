"""Data-store error binding.

PostgREST errors are converted into DataStoreError carrying an explicit
ErrorKind, so the retry policy does not have to guess from message text.
"""

from typing import Any, Iterable, Optional

from supabase import PostgrestAPIError

from infrastructure.operations.classifiers import (
    DEFAULT_AUTH_ERROR_CODES,
    DEFAULT_AUTH_MESSAGE_MARKERS,
    classify_error,
    error_code,
    error_message,
)
from infrastructure.operations.status import ErrorKind


class DataStoreError(Exception):
    """Failure reported by the data store.

    Attributes:
        message: Human-readable message from the store
        code: Store error code (e.g. "PGRST301"), if any
        kind: Classification used by the retry policy
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        kind: ErrorKind = ErrorKind.TRANSIENT,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind

    def __repr__(self) -> str:
        return (
            f"DataStoreError(message={self.message!r}, code={self.code!r}, "
            f"kind={self.kind.value})"
        )


def to_data_store_error(
    exc: BaseException,
    auth_error_codes: Iterable[str] = DEFAULT_AUTH_ERROR_CODES,
    auth_message_markers: Iterable[str] = DEFAULT_AUTH_MESSAGE_MARKERS,
) -> DataStoreError:
    """Convert a PostgREST (or any) error into a classified DataStoreError."""
    return DataStoreError(
        error_message(exc),
        code=error_code(exc),
        kind=classify_error(exc, auth_error_codes, auth_message_markers),
    )


async def run_query(
    builder: Any,
    auth_error_codes: Iterable[str] = DEFAULT_AUTH_ERROR_CODES,
) -> Any:
    """Execute a PostgREST query builder and return the response data.

    Args:
        builder: Query builder (e.g. client.table("finance").select("*"))
        auth_error_codes: Codes classified as an expired auth context

    Raises:
        DataStoreError: If the store reports an error
    """
    try:
        response = await builder.execute()
    except PostgrestAPIError as e:
        raise to_data_store_error(e, auth_error_codes) from e
    return getattr(response, "data", None)
