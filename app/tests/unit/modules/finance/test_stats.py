"""Unit tests for pay periods and monthly statistics."""

from datetime import date

import pytest

from modules.finance.models import transaction_from_dict
from modules.finance.stats import get_monthly_stats, pay_period

pytestmark = pytest.mark.unit


def tx(amount, is_income=False, day=None, created_at=None, tx_id="t"):
    return transaction_from_dict(
        {
            "id": tx_id,
            "title": "entry",
            "amount": amount,
            "tag": "food",
            "is_income": is_income,
            "date": day,
            "created_at": created_at,
        }
    )


class TestPayPeriod:
    def test_salary_day_one_is_calendar_month(self):
        assert pay_period(2024, 2, 1) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_salary_day_period(self):
        assert pay_period(2024, 3, 25) == (date(2024, 2, 25), date(2024, 3, 24))

    def test_january_starts_in_previous_year(self):
        assert pay_period(2024, 1, 25) == (date(2023, 12, 25), date(2024, 1, 24))

    def test_end_clamped_to_month_end(self):
        assert pay_period(2023, 2, 31) == (date(2023, 1, 31), date(2023, 2, 28))

    def test_start_clamped_to_previous_month_end(self):
        assert pay_period(2023, 3, 31) == (date(2023, 2, 28), date(2023, 3, 30))

    @pytest.mark.parametrize(
        "month,salary_day", [(0, 1), (13, 1), (5, 0), (5, 32)]
    )
    def test_out_of_range(self, month, salary_day):
        with pytest.raises(ValueError):
            pay_period(2024, month, salary_day)


class TestGetMonthlyStats:
    def test_totals_inside_calendar_month(self):
        transactions = [
            tx(300000, is_income=True, day="2024-05-25"),
            tx(1200, day="2024-05-01"),
            tx(800, day="2024-05-31"),
            tx(5000, day="2024-06-01"),
            tx(700, day="2024-04-30"),
        ]

        stats = get_monthly_stats(transactions, 2024, 5)

        assert stats.income == 300000
        assert stats.expense == 2000
        assert stats.balance == 298000

    def test_salary_day_window_is_inclusive(self):
        transactions = [
            tx(100, day="2024-04-25"),
            tx(200, day="2024-05-24"),
            tx(400, day="2024-04-24"),
            tx(800, day="2024-05-25"),
        ]

        stats = get_monthly_stats(transactions, 2024, 5, salary_day=25)

        assert stats.expense == 300

    def test_falls_back_to_created_at(self):
        transactions = [
            tx(100, created_at="2024-05-10T12:30:00Z"),
            tx(50, created_at="2024-06-10T12:30:00+00:00"),
            tx(25),
        ]

        stats = get_monthly_stats(transactions, 2024, 5)

        assert stats.expense == 100

    def test_date_wins_over_created_at(self):
        transactions = [tx(100, day="2024-04-30", created_at="2024-05-02T00:00:00Z")]

        assert get_monthly_stats(transactions, 2024, 5).expense == 0

    def test_empty(self):
        stats = get_monthly_stats([], 2024, 5)

        assert (stats.income, stats.expense, stats.balance) == (0, 0, 0)

    def test_negative_balance(self):
        transactions = [
            tx(1000, is_income=True, day="2024-05-02"),
            tx(2500, day="2024-05-03"),
        ]

        assert get_monthly_stats(transactions, 2024, 5).balance == -1500
