"""Pay-period arithmetic and monthly income/expense totals."""

import calendar
from datetime import date
from typing import Iterable, Tuple

from modules.finance.models import MonthlyStats, Transaction


def _days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def pay_period(year: int, month: int, salary_day: int = 1) -> Tuple[date, date]:
    """Return the first and last day (inclusive) of a pay period.

    With ``salary_day == 1`` the period is the calendar month. Otherwise the
    period for ``month`` starts on the previous month's salary day and ends
    the day before this month's salary day. Days past a month's end are
    clamped to its last day.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        salary_day: Day of month the salary is paid (1-31)

    Raises:
        ValueError: If month or salary_day is out of range

    Example:
        >>> pay_period(2024, 3, salary_day=25)
        (datetime.date(2024, 2, 25), datetime.date(2024, 3, 24))
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if not 1 <= salary_day <= 31:
        raise ValueError(f"salary_day must be between 1 and 31, got {salary_day}")

    if salary_day == 1:
        return date(year, month, 1), date(year, month, _days_in_month(year, month))

    prev_year, prev_month = (year - 1, 12) if month == 1 else (year, month - 1)
    start = date(
        prev_year,
        prev_month,
        min(salary_day, _days_in_month(prev_year, prev_month)),
    )
    end = date(year, month, min(salary_day - 1, _days_in_month(year, month)))
    return start, end


def get_monthly_stats(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    salary_day: int = 1,
) -> MonthlyStats:
    """Total income and expense of the transactions inside a pay period.

    A transaction is dated by ``date``, falling back to ``created_at``;
    undated transactions are ignored.
    """
    start, end = pay_period(year, month, salary_day)

    income = 0
    expense = 0
    for transaction in transactions:
        day = transaction.effective_date
        if day is None or not start <= day <= end:
            continue
        if transaction.is_income:
            income += transaction.amount
        else:
            expense += transaction.amount

    return MonthlyStats(income=income, expense=expense, balance=income - expense)
