"""Finance module: budgets, fixed costs, transactions and monthly totals."""

from modules.finance.models import (
    FixedCost,
    MonthlyStats,
    Transaction,
    UserFinance,
)
from modules.finance.service import FinanceService
from modules.finance.stats import get_monthly_stats, pay_period

__all__ = [
    "FinanceService",
    "FixedCost",
    "MonthlyStats",
    "Transaction",
    "UserFinance",
    "get_monthly_stats",
    "pay_period",
]
