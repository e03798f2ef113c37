"""Idempotency key builder for consistent key generation."""

import hashlib
import uuid
from typing import Any

# Fixed namespace so record ids derived from the same key never change
RECORD_ID_NAMESPACE = uuid.UUID("6f9b3a52-5d0e-4c2b-9a57-1c8e4f0b7d21")


def record_id(idempotency_key: str) -> str:
    """Derive a stable row id (UUID) from an idempotency key.

    Inserts that carry the derived id land on the same row however many
    times they are sent.
    """
    return str(uuid.uuid5(RECORD_ID_NAMESPACE, idempotency_key))


class IdempotencyKeyBuilder:
    """Build deterministic idempotency keys.

    Provides a consistent key format across services with namespace
    isolation and collision prevention.

    Example:
        >>> builder = IdempotencyKeyBuilder(namespace="finance")
        >>> key = builder.build(
        ...     operation="add_transaction",
        ...     user_id="user-123",
        ...     client_request_id="7f1c0c5e",
        ... )
        >>> key.startswith("finance:add_transaction:")
        True
    """

    def __init__(self, namespace: str):
        """Initialize key builder.

        Args:
            namespace: Namespace for key isolation (e.g., "finance", "wishlist")
        """
        if not namespace:
            raise ValueError("namespace is required")
        self.namespace = namespace

    def build(self, operation: str, **components: Any) -> str:
        """Build idempotency key from components.

        Args:
            operation: Operation type (e.g., "add_transaction")
            **components: Key components (user_id, client_request_id, etc.)

        Returns:
            Idempotency key string
        """
        sorted_components = sorted(components.items())

        key_parts = [self.namespace, operation]
        key_parts.extend(f"{k}={v}" for k, v in sorted_components)
        key_string = "|".join(str(part) for part in key_parts)

        key_hash = hashlib.sha256(key_string.encode()).hexdigest()[:16]

        return f"{self.namespace}:{operation}:{key_hash}"
