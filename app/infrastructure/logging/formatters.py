"""structlog processors for the Kakeibo log chain.

Supabase calls carry the anon key in an ``apikey`` header and the user's JWT
in ``Authorization: Bearer``. Both can surface in log fields, either as keys,
inside a logged ``headers`` dict, or echoed in a GoTrue/PostgREST error
message, so ``mask_sensitive_data`` covers all three.
"""

import re
from typing import Any

# Key fragments whose values must never reach the logs
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "apikey",
        "api_key",
        "anon_key",
        "service_role",
        "authorization",
        "access_token",
        "refresh_token",
        "cookie",
        "jwt",
    }
)

# "Bearer <token>" and bare JWTs (three base64url segments, header starts "eyJ")
BEARER_RE = re.compile(r"(?i)\bbearer\s+[A-Za-z0-9\-_.=]+")
JWT_RE = re.compile(r"\beyJ[A-Za-z0-9\-_=]+\.[A-Za-z0-9\-_=]+\.[A-Za-z0-9\-_.+/=]*")


def add_service_context(app_name: str, app_version: str, environment: str):
    """Create a processor stamping every entry with the app name, the
    deployed git SHA and the environment."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("app_name", app_name)
        event_dict.setdefault("app_version", app_version)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def scrub_tokens(text: str, mask_value: str = "***REDACTED***") -> str:
    """Replace bearer credentials and JWTs embedded in free text."""
    text = BEARER_RE.sub(f"Bearer {mask_value}", text)
    return JWT_RE.sub(mask_value, text)


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks credentials in log entries.

    Values under a key containing a sensitive pattern (case-insensitive) are
    replaced, also inside nested dicts such as a logged request ``headers``.
    Other string values have embedded bearer tokens and JWTs scrubbed.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra key patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def mask(value: Any) -> Any:
        if isinstance(value, dict):
            return {k: mask_entry(str(k), v) for k, v in value.items()}
        if isinstance(value, str):
            return scrub_tokens(value, mask_value)
        return value

    def mask_entry(key: str, value: Any) -> Any:
        key_lower = key.lower()
        if value is not None and any(pattern in key_lower for pattern in patterns):
            return mask_value
        return mask(value)

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        return {key: mask_entry(key, value) for key, value in event_dict.items()}

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates overly large string values.

    Rows returned by the data store can be large; this keeps an accidental
    ``rows=...`` field from flooding the logs.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
