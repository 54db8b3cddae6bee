"""Category model for transaction categorization."""

from dataclasses import dataclass

INCOME = "Income"
EXPENSE = "Expense"


@dataclass
class Category:
    """Represents a transaction category.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique).
        type: Either "Income" or "Expense".
    """

    id: int
    name: str
    type: str = EXPENSE
