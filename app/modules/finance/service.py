"""Finance service: budgets, fixed costs and transactions."""

from typing import Any, Dict, List, Optional

import structlog

from infrastructure.persistence import TableService
from infrastructure.resilience.models import OperationKind
from modules.finance.models import (
    FixedCost,
    Transaction,
    UserFinance,
    finance_from_dict,
    fixed_cost_from_dict,
    transaction_from_dict,
)
from modules.finance.stats import pay_period

logger = structlog.get_logger()

FINANCE_TABLE = "finance"
FIXED_COSTS_TABLE = "fixed_costs"
TRANSACTIONS_TABLE = "transactions"


class FinanceService(TableService):
    """Reads and writes a user's finance rows.

    Reads fall back to ``None`` or ``[]`` and updates/deletes to ``False``
    when the executor gives up, so callers never see data-store exceptions.
    """

    namespace = "finance"

    # Budget

    async def fetch_user_finance(self, user_id: str) -> Optional[UserFinance]:
        row = await self.run(
            lambda client: client.table(FINANCE_TABLE)
            .select("*")
            .eq("id", user_id)
            .maybe_single(),
            operation_name="fetch_user_finance",
        )
        return finance_from_dict(row) if row else None

    async def update_user_finance(
        self, user_id: str, updates: Dict[str, Any]
    ) -> Optional[UserFinance]:
        payload = self.writable(updates)
        rows = await self.run(
            lambda client: client.table(FINANCE_TABLE)
            .update(payload)
            .eq("id", user_id),
            operation_name="update_user_finance",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        row = self.first_row(rows)
        return finance_from_dict(row) if row else None

    # Fixed costs

    async def fetch_fixed_costs(self, user_id: str) -> List[FixedCost]:
        rows = await self.run(
            lambda client: client.table(FIXED_COSTS_TABLE)
            .select("*")
            .eq("created_by", user_id)
            .order("created_at", desc=True),
            operation_name="fetch_fixed_costs",
        )
        return [fixed_cost_from_dict(row) for row in rows or []]

    async def add_fixed_cost(
        self,
        user_id: str,
        data: Dict[str, Any],
        request_id: Optional[str] = None,
    ) -> Optional[FixedCost]:
        """Insert a fixed cost owned by ``user_id``.

        With a ``request_id`` the row id is derived from it, so a retried or
        re-submitted request returns the row created the first time instead
        of adding another one.
        """
        payload = {**self.writable(data), "created_by": user_id}
        row = await self.insert(
            FIXED_COSTS_TABLE,
            payload,
            user_id=user_id,
            operation_name="add_fixed_cost",
            request_id=request_id,
        )
        return fixed_cost_from_dict(row) if row else None

    async def update_fixed_cost(
        self, user_id: str, fixed_cost_id: str, data: Dict[str, Any]
    ) -> bool:
        payload = self.writable(data)
        rows = await self.run(
            lambda client: client.table(FIXED_COSTS_TABLE)
            .update(payload)
            .eq("id", fixed_cost_id)
            .eq("created_by", user_id),
            operation_name="update_fixed_cost",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None

    async def delete_fixed_cost(self, user_id: str, fixed_cost_id: str) -> bool:
        rows = await self.run(
            lambda client: client.table(FIXED_COSTS_TABLE)
            .delete()
            .eq("id", fixed_cost_id)
            .eq("created_by", user_id),
            operation_name="delete_fixed_cost",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None

    # Transactions

    async def fetch_transactions(
        self,
        user_id: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        salary_day: int = 1,
    ) -> List[Transaction]:
        """Fetch a user's transactions, newest first.

        When both ``year`` and ``month`` are given, only transactions dated
        inside that pay period are returned (see ``pay_period``).
        """
        period = pay_period(year, month, salary_day) if year and month else None

        def query(client):
            builder = client.table(TRANSACTIONS_TABLE).select("*").eq("created_by", user_id)
            if period is not None:
                start, end = period
                builder = builder.gte("date", start.isoformat()).lte(
                    "date", end.isoformat()
                )
            return builder.order("created_at", desc=True)

        if period is not None:
            logger.debug(
                "transactions_period",
                start=period[0].isoformat(),
                end=period[1].isoformat(),
            )
        rows = await self.run(query, operation_name="fetch_transactions")
        return [transaction_from_dict(row) for row in rows or []]

    async def add_transaction(
        self,
        user_id: str,
        data: Dict[str, Any],
        request_id: Optional[str] = None,
    ) -> Optional[Transaction]:
        payload = {**self.writable(data), "created_by": user_id}
        row = await self.insert(
            TRANSACTIONS_TABLE,
            payload,
            user_id=user_id,
            operation_name="add_transaction",
            request_id=request_id,
        )
        return transaction_from_dict(row) if row else None

    async def update_transaction(
        self, user_id: str, transaction_id: str, data: Dict[str, Any]
    ) -> bool:
        payload = self.writable(data)
        rows = await self.run(
            lambda client: client.table(TRANSACTIONS_TABLE)
            .update(payload)
            .eq("id", transaction_id)
            .eq("created_by", user_id),
            operation_name="update_transaction",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None

    async def delete_transaction(self, user_id: str, transaction_id: str) -> bool:
        rows = await self.run(
            lambda client: client.table(TRANSACTIONS_TABLE)
            .delete()
            .eq("id", transaction_id)
            .eq("created_by", user_id),
            operation_name="delete_transaction",
            kind=OperationKind.IDEMPOTENT_WRITE,
        )
        return rows is not None
