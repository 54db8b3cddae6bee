"""Transaction analysis tools."""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from models.category import EXPENSE, INCOME
from models.summary import MonthlySummaryItem
from logger import get_logger

logger = get_logger()

_SUMMARY_TYPES = {"income": INCOME, "expense": EXPENSE, "all": None}


def get_monthly_summary(
    services,
    user_id: str,
    month: Optional[int] = None,
    year: Optional[int] = None,
    transaction_type: str = EXPENSE,
) -> List[MonthlySummaryItem]:
    """Total a user's transactions per category for one month.

    Args:
        services: Services container with transaction service.
        user_id: Owner of the transactions.
        month: Month (1-12). Defaults to the current UTC month.
        year: Year (1-9999). Defaults to the current UTC year.
        transaction_type: Which slice to total ("Expense" by default).

    Returns:
        MonthlySummaryItem list ordered by total, largest first. An invalid
        month or year yields an empty list.

    Example:
        [
            MonthlySummaryItem(category="Rent", total_amount=Decimal("900")),
            MonthlySummaryItem(category="Groceries", total_amount=Decimal("40")),
        ]
    """
    today = datetime.now(timezone.utc).date()
    month = today.month if month is None else month
    year = today.year if year is None else year

    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        logger.warning(f"Invalid month/year for summary: month={month}, year={year}")
        return []

    transactions = services.transactions.get_transactions_by_month(
        user_id, year, month, transaction_type=transaction_type
    )

    totals: Dict[str, Decimal] = {}
    for transaction in transactions:
        name = transaction.category_name
        totals[name] = totals.get(name, Decimal("0")) + transaction.amount

    summary = [
        MonthlySummaryItem(category=name, total_amount=total)
        for name, total in totals.items()
    ]
    summary.sort(key=lambda item: item.total_amount, reverse=True)
    return summary


def resolve_time_period(
    time_period: str, today: Optional[date] = None
) -> Optional[Tuple[date, date]]:
    """Turn a named period into an inclusive (start, end) date range.

    Supported: "this month", "last month", "this year", "last year" and a
    bare year such as "2023". "this ..." periods end today.

    Returns:
        (start, end) tuple, or None if the period is not understood.
    """
    today = today or datetime.now(timezone.utc).date()
    period = time_period.strip().lower()

    if period == "this month":
        return today.replace(day=1), today
    if period == "last month":
        start = today.replace(day=1) - relativedelta(months=1)
        return start, start + relativedelta(day=31)
    if period == "this year":
        return date(today.year, 1, 1), today
    if period == "last year":
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)
    if period.isdigit() and 1 <= int(period) <= 9999:
        year = int(period)
        return date(year, 1, 1), date(year, 12, 31)

    return None


def get_spending_summary(
    services,
    user_id: str,
    time_period: str,
    transaction_type: str = "All",
    category_name: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """Describe a user's income or spending over a named period.

    Args:
        services: Services container with transaction service.
        user_id: Owner of the transactions.
        time_period: See ``resolve_time_period``.
        transaction_type: "Income", "Expense" or "All" (case-insensitive).
        category_name: Optional category filter.
        today: Reference date, defaults to the current UTC date.

    Returns:
        Human-readable summary; an error sentence for bad arguments.
    """
    type_key = transaction_type.strip().lower()
    if type_key not in _SUMMARY_TYPES:
        return (
            f"Error: Invalid transaction type filter '{transaction_type}'. "
            "Must be 'Income', 'Expense', or 'All'."
        )

    date_range = resolve_time_period(time_period, today)
    if date_range is None:
        return (
            f"Error: Unsupported time period '{time_period}'. Try 'this month', "
            "'last month', 'this year', 'last year', or a specific year (e.g., '2023')."
        )

    start, end = date_range
    transactions = services.transactions.get_transactions_by_date_range(
        user_id,
        start,
        end,
        transaction_type=_SUMMARY_TYPES[type_key],
        category_name=category_name,
    )

    scope = f" in category '{category_name}'" if category_name else ""
    if not transactions:
        return f"No {type_key} transactions found for {time_period}{scope}."

    total = sum((t.amount for t in transactions), Decimal("0"))
    summary = f"Total {type_key} for {time_period}{scope}: {total:.2f}."

    if not category_name:
        breakdown: Dict[str, Decimal] = {}
        for t in transactions:
            breakdown[t.category_name] = (
                breakdown.get(t.category_name, Decimal("0")) + t.amount
            )
        lines = [f"{name}: {amount:.2f}" for name, amount in breakdown.items()]
        summary += "\nBreakdown by category:\n" + "\n".join(lines)

    return summary
