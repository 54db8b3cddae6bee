"""Derived summary records. Computed on demand, never stored."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class MonthlySummaryItem:
    """Total amount for one category within a user/month/type slice."""

    category: str
    total_amount: Decimal
