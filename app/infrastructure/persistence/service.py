"""Table service base for dependency injection.

Every query a domain service issues goes through TableService.run(), which
binds the service's Supabase client (app-wide, or the caller's in an API
request), converts PostgREST errors into classified DataStoreErrors and hands
the attempt to the ResilientExecutor.
"""

from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

import structlog

from infrastructure.clients.supabase.errors import run_query
from infrastructure.idempotency.key_builder import IdempotencyKeyBuilder, record_id
from infrastructure.operations.result import OperationResult
from infrastructure.resilience.models import OperationKind

if TYPE_CHECKING:
    from supabase import AsyncClient

    from infrastructure.clients.supabase.client import SupabaseClientManager
    from infrastructure.resilience.executor import ResilientExecutor

logger = structlog.get_logger(__name__)

# Columns owned by the data store; callers cannot overwrite them
PROTECTED_FIELDS = frozenset({"id", "created_by", "created_at"})

QueryFactory = Callable[["AsyncClient"], Any]


class TableService:
    """Base class for services backed by Supabase tables.

    Subclasses set ``namespace`` (used for idempotency keys) and build
    queries with a factory taking the client, so each attempt gets a fresh
    query builder.

    Usage:
        class WishlistService(TableService):
            namespace = "wishlist"

            async def fetch_wishlist(self, user_id):
                rows = await self.run(
                    lambda client: client.table("wishlist")
                    .select("*")
                    .eq("created_by", user_id),
                    operation_name="fetch_wishlist",
                )
                return rows or []
    """

    namespace = "data"

    def __init__(
        self,
        client_manager: "SupabaseClientManager",
        executor: "ResilientExecutor",
    ):
        self._client_manager = client_manager
        self._executor = executor
        self._keys = IdempotencyKeyBuilder(self.namespace)

    async def run(
        self,
        query: QueryFactory,
        *,
        operation_name: str,
        kind: OperationKind = OperationKind.READ,
        idempotency_key: Optional[str] = None,
    ) -> Any:
        """Run a query through the executor.

        Args:
            query: Callable building the query from the client
            operation_name: Name used in log events
            kind: How safe the query is to repeat
            idempotency_key: Key under which a successful result is remembered

        Returns:
            The response data, or None if the query did not complete

        Raises:
            ValueError: If the Supabase client is not configured
        """
        operation = await self._operation(query)
        return await self._executor.execute(
            operation,
            kind=kind,
            idempotency_key=idempotency_key,
            operation_name=operation_name,
        )

    async def run_result(
        self,
        query: QueryFactory,
        *,
        operation_name: str,
        kind: OperationKind = OperationKind.READ,
    ) -> OperationResult:
        """Run a query and return the executor's tagged result.

        Used where "no row" and "the query did not complete" lead to
        different outcomes.
        """
        operation = await self._operation(query)
        return await self._executor.execute_result(
            operation, kind=kind, operation_name=operation_name
        )

    async def insert(
        self,
        table: str,
        payload: Dict[str, Any],
        *,
        user_id: str,
        operation_name: str,
        request_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Insert one row and return it.

        Without a ``request_id`` this is a plain insert that is never repeated
        after a transient failure. With one, the row id is derived from the
        idempotency key and the row is upserted on ``id`` ignoring duplicates,
        so a retry after a lost acknowledgement cannot add a second row. When
        the row already existed the upsert returns nothing and the stored row
        is read back.

        Args:
            table: Table name
            payload: Writable columns (see writable())
            user_id: Acting user, part of the idempotency key
            operation_name: Name used in log events and the idempotency key
            request_id: Client-generated id of the request, if any

        Returns:
            The inserted (or previously inserted) row, or None on failure
        """
        key = self.idempotency_key(operation_name, user_id, request_id)
        if key is None:
            rows = await self.run(
                lambda client: client.table(table).insert(payload),
                operation_name=operation_name,
                kind=OperationKind.WRITE,
            )
            return self.first_row(rows)

        row_id = record_id(key)
        keyed = {**payload, "id": row_id}
        rows = await self.run(
            lambda client: client.table(table).upsert(
                keyed, on_conflict="id", ignore_duplicates=True
            ),
            operation_name=operation_name,
            kind=OperationKind.IDEMPOTENT_WRITE,
            idempotency_key=key,
        )
        if rows == []:
            logger.info(
                "keyed_insert_already_applied", table=table, operation=operation_name
            )
            rows = await self.run(
                lambda client: client.table(table)
                .select("*")
                .eq("id", row_id)
                .maybe_single(),
                operation_name=f"{operation_name}_read_back",
            )
        return self.first_row(rows)

    async def _operation(self, query: QueryFactory):
        client = await self._client_manager.get_client()
        auth_error_codes = self._executor.policy.auth_error_codes

        async def operation():
            return await run_query(query(client), auth_error_codes)

        return operation

    def idempotency_key(
        self, operation: str, user_id: str, request_id: Optional[str]
    ) -> Optional[str]:
        """Build the idempotency key for a client request, if one was sent."""
        if not request_id:
            return None
        return self._keys.build(operation, user_id=user_id, request_id=request_id)

    @staticmethod
    def writable(data: Dict[str, Any]) -> Dict[str, Any]:
        """Drop store-owned columns from a payload."""
        dropped = PROTECTED_FIELDS.intersection(data)
        if dropped:
            logger.debug("protected_fields_dropped", fields=sorted(dropped))
        return {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}

    @staticmethod
    def first_row(data: Any) -> Optional[Dict[str, Any]]:
        """Return the first row of a response (lists for inserts/updates)."""
        if isinstance(data, list):
            return data[0] if data else None
        return data
