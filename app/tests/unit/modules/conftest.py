"""Fixtures for domain service tests."""

import pytest


@pytest.fixture
def transaction_row():
    """Factory for rows of the transactions table."""

    def _make(**overrides):
        row = {
            "id": "t1",
            "created_by": "user-123",
            "title": "Groceries",
            "description": "",
            "amount": 3200,
            "tag": "food",
            "is_income": False,
            "date": "2024-05-10",
            "created_at": "2024-05-10T09:00:00+00:00",
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def fixed_cost_row():
    def _make(**overrides):
        row = {
            "id": "f1",
            "created_by": "user-123",
            "title": "Rent",
            "cost": 80000,
            "tag": "housing",
            "debit_date": 27,
            "created_at": "2024-01-01T00:00:00+00:00",
        }
        row.update(overrides)
        return row

    return _make
