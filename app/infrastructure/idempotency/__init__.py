"""Infrastructure idempotency cache.

Lets callers attach an idempotency key to write operations. The first
successful result is remembered for the TTL and a re-submitted request with
the same key gets that result back instead of writing again. For inserts the
key also yields a stable row id (record_id), so the store itself rejects a
second copy of the row.

Usage:

    from infrastructure.idempotency import IdempotencyKeyBuilder, record_id

    key = IdempotencyKeyBuilder("finance").build(
        "add_transaction", user_id=user_id, request_id=request_id
    )
    row = {**payload, "id": record_id(key)}
"""

from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.idempotency.key_builder import IdempotencyKeyBuilder, record_id
from infrastructure.idempotency.memory import InMemoryCache
from infrastructure.idempotency.service import IdempotencyService

__all__ = [
    "IdempotencyCache",
    "IdempotencyKeyBuilder",
    "IdempotencyService",
    "InMemoryCache",
    "record_id",
]
