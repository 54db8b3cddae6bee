from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
import uuid

from models.category import Category


@dataclass
class Transaction:
    id: str  # uuid4 hex, assigned on creation
    user_id: str
    amount: Decimal  # never converted to float
    transaction_date: date
    description: str
    type: str  # 'Income' or 'Expense'
    category: Optional[Category] = None

    @classmethod
    def new(
        cls,
        user_id: str,
        amount: Decimal,
        transaction_date: date,
        description: str,
        type: str,
        category: Optional[Category] = None,
    ) -> "Transaction":
        """Create a Transaction with a freshly generated ID."""
        return cls(
            id=uuid.uuid4().hex,
            user_id=user_id,
            amount=amount,
            transaction_date=transaction_date,
            description=description,
            type=type,
            category=category,
        )

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else "Uncategorized"
