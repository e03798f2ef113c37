"""Error classifiers for data-store failures.

Decides whether a failed data-access call is an expired authentication
context (refresh the session, then retry) or a transient failure (back off,
then retry).

Classification order:
1. An explicit ``kind`` attribute set by the data-store binding
   (see infrastructure.clients.supabase.errors.DataStoreError)
2. An exact match of the error ``code`` against the configured auth codes
3. Substring match of the error message against the auth markers. This is a
   compatibility shim for providers that do not expose structured codes.

Usage:
    from infrastructure.operations.classifiers import classify_error

    try:
        rows = await operation()
    except Exception as exc:
        if classify_error(exc) is ErrorKind.AUTH_EXPIRED:
            await session_provider.refresh_session()
"""

from typing import Iterable, Optional

from infrastructure.operations.status import ErrorKind

DEFAULT_AUTH_ERROR_CODES = frozenset({"PGRST301"})
DEFAULT_AUTH_MESSAGE_MARKERS = ("JWT", "token")


def error_message(exc: BaseException) -> str:
    """Return the human-readable message of a data-store error.

    PostgREST errors expose ``message``; anything else falls back to str().
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def error_code(exc: BaseException) -> Optional[str]:
    """Return the machine error code of a data-store error, if any."""
    code = getattr(exc, "code", None)
    if code is None:
        return None
    return str(code)


def classify_error(
    exc: BaseException,
    auth_error_codes: Iterable[str] = DEFAULT_AUTH_ERROR_CODES,
    auth_message_markers: Iterable[str] = DEFAULT_AUTH_MESSAGE_MARKERS,
) -> ErrorKind:
    """Classify a failure raised by a data-access operation.

    Args:
        exc: Exception raised by the operation
        auth_error_codes: Codes denoting an expired auth/RLS context
        auth_message_markers: Case-sensitive substrings denoting a credential error

    Returns:
        ErrorKind.AUTH_EXPIRED or ErrorKind.TRANSIENT

    Example:
        >>> classify_error(Exception("JWT expired"))
        <ErrorKind.AUTH_EXPIRED: 'auth_expired'>
        >>> classify_error(Exception("network error"))
        <ErrorKind.TRANSIENT: 'transient'>
    """
    kind = getattr(exc, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind

    code = error_code(exc)
    if code is not None and code in set(auth_error_codes):
        return ErrorKind.AUTH_EXPIRED

    message = error_message(exc)
    if any(marker in message for marker in auth_message_markers):
        return ErrorKind.AUTH_EXPIRED

    return ErrorKind.TRANSIENT
