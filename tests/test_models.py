from datetime import date
from decimal import Decimal

from models.category import Category
from models.transaction import Transaction


def make(category=None):
    return Transaction.new(
        user_id="u1",
        amount=Decimal("1.50"),
        transaction_date=date(2025, 8, 8),
        description="bus",
        type="Expense",
        category=category,
    )


def test_new_assigns_unique_hex_ids():
    first, second = make(), make()

    assert first.id != second.id
    assert len(first.id) == 32
    int(first.id, 16)


def test_category_name():
    assert make(Category(id=1, name="Transport")).category_name == "Transport"
    assert make().category_name == "Uncategorized"


def test_transaction_has_only_store_facing_helpers():
    assert not hasattr(Transaction, "to_dict")
