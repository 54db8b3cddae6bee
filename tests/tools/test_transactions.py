"""Tests for transaction analysis tools."""

from datetime import date
from decimal import Decimal

import pytest

from models.summary import MonthlySummaryItem
from models.transaction import Transaction
from tools.transactions import (
    get_monthly_summary,
    get_spending_summary,
    resolve_time_period,
)


def add(services, amount, category, day=date(2025, 8, 10), user_id="u1", type="Expense"):
    category_type = "Income" if type == "Income" else "Expense"
    transaction = Transaction.new(
        user_id=user_id,
        amount=Decimal(amount),
        transaction_date=day,
        description=f"{category} item",
        type=type,
        category=services.categories.find_or_create(category, category_type),
    )
    services.transactions.create(transaction)
    return transaction


class TestGetMonthlySummary:
    """Tests for get_monthly_summary."""

    def test_totals_per_category_ordered_descending(self, services):
        add(services, "15", "Groceries")
        add(services, "25", "Groceries")
        add(services, "900", "Rent")

        summary = get_monthly_summary(services, "u1", month=8, year=2025)

        assert summary == [
            MonthlySummaryItem(category="Rent", total_amount=Decimal("900")),
            MonthlySummaryItem(category="Groceries", total_amount=Decimal("40")),
        ]

    def test_only_requested_user_and_month(self, services):
        add(services, "10", "Groceries")
        add(services, "99", "Groceries", user_id="u2")
        add(services, "77", "Groceries", day=date(2025, 9, 1))

        summary = get_monthly_summary(services, "u1", month=8, year=2025)

        assert summary == [MonthlySummaryItem("Groceries", Decimal("10"))]

    def test_income_is_excluded_from_expense_summary(self, services):
        add(services, "5000", "Salary", type="Income")
        add(services, "12", "Transport")

        summary = get_monthly_summary(services, "u1", month=8, year=2025)

        assert [item.category for item in summary] == ["Transport"]

    def test_decimal_totals_are_exact(self, services):
        add(services, "0.1", "Groceries")
        add(services, "0.2", "Groceries")

        (item,) = get_monthly_summary(services, "u1", month=8, year=2025)

        assert item.total_amount == Decimal("0.3")

    @pytest.mark.parametrize("month,year", [(13, 2025), (0, 2025), (8, 0), (8, 10000)])
    def test_invalid_month_or_year_returns_empty(self, services, month, year):
        add(services, "10", "Groceries")

        assert get_monthly_summary(services, "u1", month=month, year=year) == []

    def test_defaults_to_current_month(self, services):
        from agent.dispatcher import utc_today

        add(services, "8", "Health", day=utc_today())

        summary = get_monthly_summary(services, "u1")

        assert summary == [MonthlySummaryItem("Health", Decimal("8"))]

    def test_empty_month(self, services):
        assert get_monthly_summary(services, "u1", month=1, year=2020) == []


class TestResolveTimePeriod:
    """Tests for resolve_time_period."""

    TODAY = date(2025, 3, 15)

    @pytest.mark.parametrize(
        "period,expected",
        [
            ("this month", (date(2025, 3, 1), date(2025, 3, 15))),
            ("Last Month", (date(2025, 2, 1), date(2025, 2, 28))),
            ("this year", (date(2025, 1, 1), date(2025, 3, 15))),
            ("last year", (date(2024, 1, 1), date(2024, 12, 31))),
            ("2023", (date(2023, 1, 1), date(2023, 12, 31))),
        ],
    )
    def test_supported_periods(self, period, expected):
        assert resolve_time_period(period, self.TODAY) == expected

    def test_last_month_in_january_wraps_year(self):
        assert resolve_time_period("last month", date(2025, 1, 10)) == (
            date(2024, 12, 1),
            date(2024, 12, 31),
        )

    @pytest.mark.parametrize("period", ["next week", "", "0"])
    def test_unsupported_periods(self, period):
        assert resolve_time_period(period, self.TODAY) is None


class TestGetSpendingSummary:
    """Tests for get_spending_summary."""

    TODAY = date(2025, 8, 20)

    def test_total_with_breakdown(self, services):
        add(services, "10.50", "Groceries")
        add(services, "4.50", "Groceries")
        add(services, "30", "Travel")

        summary = get_spending_summary(
            services, "u1", "this month", "Expense", today=self.TODAY
        )

        lines = summary.splitlines()
        assert lines[0] == "Total expense for this month: 45.00."
        assert lines[1] == "Breakdown by category:"
        assert set(lines[2:]) == {"Groceries: 15.00", "Travel: 30.00"}

    def test_category_filter_omits_breakdown(self, services):
        add(services, "10", "Groceries")
        add(services, "30", "Travel")

        summary = get_spending_summary(
            services, "u1", "2025", "All", category_name="Travel", today=self.TODAY
        )

        assert summary == "Total all for 2025 in category 'Travel': 30.00."

    def test_income_filter(self, services):
        add(services, "3000", "Salary", type="Income")
        add(services, "30", "Travel")

        summary = get_spending_summary(
            services, "u1", "this year", "income", today=self.TODAY
        )

        assert summary.startswith("Total income for this year: 3000.00.")
        assert "Travel" not in summary

    def test_no_transactions(self, services):
        summary = get_spending_summary(
            services, "u1", "last year", "Expense", today=self.TODAY
        )

        assert summary == "No expense transactions found for last year."

    def test_invalid_type(self, services):
        summary = get_spending_summary(services, "u1", "this month", "Transfer")

        assert summary.startswith("Error: Invalid transaction type filter 'Transfer'")

    def test_invalid_period(self, services):
        summary = get_spending_summary(services, "u1", "fortnight")

        assert summary.startswith("Error: Unsupported time period 'fortnight'")
