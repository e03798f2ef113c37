"""API request schemas for the finance endpoints.

Pydantic models validate request bodies; the services receive plain dicts
from ``model_dump(mode="json")``. Update models leave every field optional
and are dumped with ``exclude_unset`` so only sent fields change.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class BudgetUpdate(BaseModel):
    """Monthly savings goal and per-category budgets."""

    savings_goal: Optional[float] = Field(default=None, ge=0)
    food: Optional[float] = Field(default=None, ge=0)
    entertainment: Optional[float] = Field(default=None, ge=0)
    clothing: Optional[float] = Field(default=None, ge=0)
    daily_goods: Optional[float] = Field(default=None, ge=0)
    other: Optional[float] = Field(default=None, ge=0)


class FixedCostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    cost: float = Field(..., ge=0)
    tag: str = Field(..., min_length=1)
    debit_date: int = Field(..., ge=1, le=31, description="Day of month debited")


class FixedCostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    cost: Optional[float] = Field(default=None, ge=0)
    tag: Optional[str] = Field(default=None, min_length=1)
    debit_date: Optional[int] = Field(default=None, ge=1, le=31)


class TransactionCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., ge=0)
    tag: str = Field(..., min_length=1)
    is_income: bool = False
    description: str = ""
    date: dt.date = Field(..., description="Day the transaction is booked on")


class TransactionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    amount: Optional[float] = Field(default=None, ge=0)
    tag: Optional[str] = Field(default=None, min_length=1)
    is_income: Optional[bool] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
