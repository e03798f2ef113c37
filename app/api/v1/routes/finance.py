from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query, Request, status

from api.dependencies.rate_limits import get_limiter
from api.dependencies.services import (
    CurrentUserIdDep,
    FinanceServiceDep,
    UserServiceDep,
)
from api.responses import not_completed, not_found, serialize, serialize_many
from infrastructure.logging import get_module_logger
from modules.finance import get_monthly_stats
from modules.finance.schemas import (
    BudgetUpdate,
    FixedCostCreate,
    FixedCostUpdate,
    TransactionCreate,
    TransactionUpdate,
)

logger = get_module_logger()

router = APIRouter(prefix="/finance", tags=["Finance"])
limiter = get_limiter()


async def _salary_day(users: UserServiceDep, user_id: str) -> int:
    profile = await users.fetch_user_profile(user_id)
    return profile.salary_day if profile else 1


# Budget


@router.get("/budget")
@limiter.limit("60/minute")
async def get_budget(
    request: Request, user_id: CurrentUserIdDep, finance: FinanceServiceDep
):  # pylint: disable=unused-argument
    budget = await finance.fetch_user_finance(user_id)
    if budget is None:
        raise not_found("Budget")
    return {**serialize(budget), "total_budget": budget.total_budget}


@router.patch("/budget")
@limiter.limit("30/minute")
async def update_budget(
    request: Request,
    updates: BudgetUpdate,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
):  # pylint: disable=unused-argument
    budget = await finance.update_user_finance(
        user_id, updates.model_dump(mode="json", exclude_unset=True)
    )
    if budget is None:
        raise not_completed("update the budget")
    return {**serialize(budget), "total_budget": budget.total_budget}


# Fixed costs


@router.get("/fixed-costs")
@limiter.limit("60/minute")
async def list_fixed_costs(
    request: Request, user_id: CurrentUserIdDep, finance: FinanceServiceDep
):  # pylint: disable=unused-argument
    return serialize_many(await finance.fetch_fixed_costs(user_id))


@router.post("/fixed-costs", status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
async def create_fixed_cost(
    request: Request,
    fixed_cost: FixedCostCreate,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
):  # pylint: disable=unused-argument
    """Add a fixed cost.

    Send an Idempotency-Key header to make the request safe to repeat: the
    same key always yields the same row.
    """
    created = await finance.add_fixed_cost(
        user_id, fixed_cost.model_dump(mode="json"), request_id=idempotency_key
    )
    if created is None:
        raise not_completed("add the fixed cost")
    return serialize(created)


@router.patch("/fixed-costs/{fixed_cost_id}")
@limiter.limit("30/minute")
async def update_fixed_cost(
    request: Request,
    fixed_cost_id: str,
    updates: FixedCostUpdate,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
):  # pylint: disable=unused-argument
    if not await finance.update_fixed_cost(
        user_id, fixed_cost_id, updates.model_dump(mode="json", exclude_unset=True)
    ):
        raise not_completed("update the fixed cost")
    return {"success": True}


@router.delete("/fixed-costs/{fixed_cost_id}")
@limiter.limit("30/minute")
async def delete_fixed_cost(
    request: Request,
    fixed_cost_id: str,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
):  # pylint: disable=unused-argument
    if not await finance.delete_fixed_cost(user_id, fixed_cost_id):
        raise not_completed("delete the fixed cost")
    return {"success": True}


# Transactions


@router.get("/transactions")
@limiter.limit("60/minute")
async def list_transactions(
    request: Request,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
    users: UserServiceDep,
    year: Optional[int] = Query(default=None, ge=1970),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    salary_day: Optional[int] = Query(default=None, ge=1, le=31),
):  # pylint: disable=unused-argument
    """List transactions, newest first.

    With ``year`` and ``month`` only that pay period is returned. The pay
    period follows ``salary_day``, or the user's profile when it is omitted.
    """
    if (year is None) != (month is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="year and month must be given together",
        )
    if year is not None and salary_day is None:
        salary_day = await _salary_day(users, user_id)
    transactions = await finance.fetch_transactions(
        user_id, year, month, salary_day=salary_day or 1
    )
    return serialize_many(transactions)


@router.post("/transactions", status_code=status.HTTP_201_CREATED)
@limiter.limit("60/minute")
async def create_transaction(
    request: Request,
    transaction: TransactionCreate,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key"),
):  # pylint: disable=unused-argument
    created = await finance.add_transaction(
        user_id, transaction.model_dump(mode="json"), request_id=idempotency_key
    )
    if created is None:
        raise not_completed("add the transaction")
    return serialize(created)


@router.patch("/transactions/{transaction_id}")
@limiter.limit("60/minute")
async def update_transaction(
    request: Request,
    transaction_id: str,
    updates: TransactionUpdate,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
):  # pylint: disable=unused-argument
    if not await finance.update_transaction(
        user_id, transaction_id, updates.model_dump(mode="json", exclude_unset=True)
    ):
        raise not_completed("update the transaction")
    return {"success": True}


@router.delete("/transactions/{transaction_id}")
@limiter.limit("60/minute")
async def delete_transaction(
    request: Request,
    transaction_id: str,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
):  # pylint: disable=unused-argument
    if not await finance.delete_transaction(user_id, transaction_id):
        raise not_completed("delete the transaction")
    return {"success": True}


# Monthly totals


@router.get("/stats")
@limiter.limit("60/minute")
async def get_stats(
    request: Request,
    user_id: CurrentUserIdDep,
    finance: FinanceServiceDep,
    users: UserServiceDep,
    year: int = Query(..., ge=1970),
    month: int = Query(..., ge=1, le=12),
):  # pylint: disable=unused-argument
    """Income, expense and balance of the pay period for ``year``/``month``."""
    salary_day = await _salary_day(users, user_id)
    # Unfiltered so rows without a date are placed by created_at
    transactions = await finance.fetch_transactions(user_id)
    stats = get_monthly_stats(transactions, year, month, salary_day)
    logger.debug(
        "monthly_stats_computed", user_id=user_id, year=year, month=month
    )
    return {
        "year": year,
        "month": month,
        "salary_day": salary_day,
        **serialize(stats),
    }
