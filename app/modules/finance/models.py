"""Finance data models.

Lightweight dataclasses mirroring the rows of the ``finance``,
``fixed_costs`` and ``transactions`` tables. The ``*_from_dict`` helpers
normalize raw PostgREST rows and keep the full row in ``raw``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional


def parse_date(value: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` (or longer ISO) value into a date."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass
class UserFinance:
    """Monthly savings goal and per-category budgets of a user."""

    id: Optional[str]
    savings_goal: float = 0
    food: float = 0
    entertainment: float = 0
    clothing: float = 0
    daily_goods: float = 0
    other: float = 0

    @property
    def total_budget(self) -> float:
        return (
            self.food + self.entertainment + self.clothing + self.daily_goods + self.other
        )


@dataclass
class FixedCost:
    """Recurring cost debited on ``debit_date`` each month.

    Attributes:
        id: Row id
        title: Display name
        cost: Amount debited
        tag: Category tag
        debit_date: Day of month the cost is debited (1-31)
        created_by: Owning user id
        created_at: Creation timestamp
    """

    id: str
    title: str
    cost: float
    tag: str
    debit_date: int
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class Transaction:
    """Income or expense entry.

    ``date`` is the day the user booked the transaction; older rows may only
    carry ``created_at``. ``effective_date`` picks whichever is present.
    """

    id: str
    title: str
    amount: float
    tag: str
    is_income: bool
    description: str = ""
    date: Optional[date] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def effective_date(self) -> Optional[date]:
        if self.date is not None:
            return self.date
        if self.created_at is not None:
            return self.created_at.date()
        return None


@dataclass(frozen=True)
class MonthlyStats:
    income: float
    expense: float
    balance: float


def finance_from_dict(row: Dict[str, Any]) -> UserFinance:
    return UserFinance(
        id=row.get("id"),
        savings_goal=row.get("savings_goal") or 0,
        food=row.get("food") or 0,
        entertainment=row.get("entertainment") or 0,
        clothing=row.get("clothing") or 0,
        daily_goods=row.get("daily_goods") or 0,
        other=row.get("other") or 0,
    )


def fixed_cost_from_dict(row: Dict[str, Any]) -> FixedCost:
    return FixedCost(
        id=row["id"],
        title=row.get("title", ""),
        cost=row.get("cost") or 0,
        tag=row.get("tag", ""),
        debit_date=int(row.get("debit_date") or 1),
        created_by=row.get("created_by"),
        created_at=parse_datetime(row.get("created_at")),
        raw=row,
    )


def transaction_from_dict(row: Dict[str, Any]) -> Transaction:
    return Transaction(
        id=row["id"],
        title=row.get("title", ""),
        amount=row.get("amount") or 0,
        tag=row.get("tag", ""),
        is_income=bool(row.get("is_income")),
        description=row.get("description") or "",
        date=parse_date(row.get("date")),
        created_by=row.get("created_by"),
        created_at=parse_datetime(row.get("created_at")),
        raw=row,
    )
