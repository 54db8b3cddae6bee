"""Transaction service for database operations."""

import calendar
from datetime import date
from decimal import Decimal
from typing import List, Optional

from categorization import resolve_category
from models.category import Category, EXPENSE
from models.transaction import Transaction
from logger import get_logger

logger = get_logger()

# SQL Query Constants
_TRANSACTION_SELECT = """
    SELECT t.id, t.user_id, t.amount, t.transaction_date, t.description,
           t.transaction_type, c.id, c.name, c.category_type
    FROM transactions t
    JOIN categories c ON c.id = t.category_id
"""

_TRANSACTION_ORDER = " ORDER BY t.transaction_date DESC, t.rowid DESC"


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager, categories):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
            categories: CategoryService used to resolve categories on insert.
        """
        self.db_manager = db_manager
        self.categories = categories

    def create(self, transaction: Transaction) -> Transaction:
        """Create a single transaction in the database.

        The category is taken as given; callers that need inference go
        through ``log_transaction``.

        Args:
            transaction: Transaction object to insert. Its category must
                already exist in the store.

        Returns:
            The same Transaction object.

        Raises:
            ValueError: If the transaction has no persisted category.
            sqlite3.Error: If the insert fails.
        """
        if transaction.category is None or transaction.category.id is None:
            raise ValueError("Transaction category must be persisted before insert")

        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO transactions (id, user_id, amount, transaction_date,
                    description, transaction_type, category_id)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    transaction.id,
                    transaction.user_id,
                    str(transaction.amount),
                    transaction.transaction_date.isoformat(),
                    transaction.description,
                    transaction.type,
                    transaction.category.id,
                ),
            )
            conn.commit()

        return transaction

    def log_transaction(
        self,
        amount: Decimal,
        category_hint: Optional[str],
        description: str,
        transaction_date: date,
        user_id: str,
    ) -> bool:
        """Record an expense, inferring its category when the hint is unusable.

        This is the deterministic entry point shared by the agent and by
        programmatic callers. Store errors are logged and reported as False.

        Args:
            amount: Transaction amount.
            category_hint: Requested category; replaced by the classifier
                unless it is one of the required categories.
            description: Free-text description.
            transaction_date: Date of the transaction.
            user_id: Owner of the transaction.

        Returns:
            True if the transaction was persisted, False otherwise.
        """
        if not amount.is_finite():
            logger.error(f"Refusing to log non-finite amount {amount} for user {user_id}")
            return False

        try:
            with self.db_manager.write_lock():
                category_name = resolve_category(category_hint, description)
                category = self.categories.find_or_create(category_name, EXPENSE)

                transaction = Transaction.new(
                    user_id=user_id,
                    amount=amount,
                    transaction_date=transaction_date,
                    description=description,
                    type=EXPENSE,
                    category=category,
                )
                logger.info(
                    f"Logging transaction: {amount} {category_name} "
                    f"'{description}' {transaction_date.isoformat()}"
                )
                self.create(transaction)
            return True
        except Exception as e:
            logger.error(f"Failed to log transaction for user {user_id}: {e}")
            return False

    def find(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID, scoped to its owner.

        Args:
            user_id: Owner of the transaction.
            transaction_id: The transaction ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _TRANSACTION_SELECT + " WHERE t.user_id = ? AND t.id = ?",
                (user_id, transaction_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_by_user(self, user_id: str) -> List[Transaction]:
        """Get all transactions for a user, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _TRANSACTION_SELECT + " WHERE t.user_id = ?" + _TRANSACTION_ORDER,
                (user_id,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_recent(self, user_id: str, limit: int = 10) -> List[Transaction]:
        """Get the most recent transactions for a user.

        Args:
            user_id: Owner of the transactions.
            limit: Maximum number of transactions to return.

        Returns:
            Up to ``limit`` Transaction objects ordered by date (newest first).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                _TRANSACTION_SELECT
                + " WHERE t.user_id = ?"
                + _TRANSACTION_ORDER
                + " LIMIT ?",
                (user_id, limit),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def get_transactions_by_date_range(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        *,
        transaction_type: Optional[str] = None,
        category_name: Optional[str] = None,
    ) -> List[Transaction]:
        """Get a user's transactions within a date range (inclusive).

        Args:
            user_id: Owner of the transactions.
            start_date: First day of the range.
            end_date: Last day of the range.
            transaction_type: Optional "Income" or "Expense" filter.
            category_name: Optional category filter (case-insensitive).

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        query = (
            _TRANSACTION_SELECT
            + " WHERE t.user_id = ? AND t.transaction_date >= ? AND t.transaction_date <= ?"
        )
        params = [user_id, start_date.isoformat(), end_date.isoformat()]

        if transaction_type is not None:
            query += " AND t.transaction_type = ?"
            params.append(transaction_type)

        if category_name:
            query += " AND c.name = ? COLLATE NOCASE"
            params.append(category_name)

        query += _TRANSACTION_ORDER

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def get_transactions_by_month(
        self,
        user_id: str,
        year: int,
        month: int,
        *,
        transaction_type: Optional[str] = None,
    ) -> List[Transaction]:
        """Get a user's transactions for a specific month.

        Args:
            user_id: Owner of the transactions.
            year: Year (e.g., 2025).
            month: Month (1-12).
            transaction_type: Optional "Income" or "Expense" filter.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        last_day = calendar.monthrange(year, month)[1]

        return self.get_transactions_by_date_range(
            user_id,
            date(year, month, 1),
            date(year, month, last_day),
            transaction_type=transaction_type,
        )

    def update(self, user_id: str, transaction: Transaction) -> bool:
        """Overwrite a stored transaction's fields, scoped to its owner.

        The id and owner are not changed. The category is taken as given,
        as in ``create``.

        Args:
            user_id: Owner of the transaction.
            transaction: Transaction carrying the id and the new field values.

        Returns:
            True if a transaction was updated, False if not found.

        Raises:
            ValueError: If the category is not persisted or the amount is
                not finite.
        """
        if transaction.category is None or transaction.category.id is None:
            raise ValueError("Transaction category must be persisted before update")
        if not transaction.amount.is_finite():
            raise ValueError(f"Invalid amount: {transaction.amount}")

        with self.db_manager.write_lock():
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    """
                    UPDATE transactions
                    SET amount = ?, transaction_date = ?, description = ?,
                        transaction_type = ?, category_id = ?
                    WHERE id = ? AND user_id = ?
                    """,
                    (
                        str(transaction.amount),
                        transaction.transaction_date.isoformat(),
                        transaction.description,
                        transaction.type,
                        transaction.category.id,
                        transaction.id,
                        user_id,
                    ),
                )
                conn.commit()
                return cursor.rowcount > 0

    def delete(self, user_id: str, transaction_id: str) -> bool:
        """Delete a transaction by ID, scoped to its owner.

        Returns:
            True if a transaction was deleted, False if not found.
        """
        with self.db_manager.write_lock():
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM transactions WHERE id = ? AND user_id = ?",
                    (transaction_id, user_id),
                )
                conn.commit()
                return cursor.rowcount > 0

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a joined database row to a Transaction object."""
        return Transaction(
            id=row[0],
            user_id=row[1],
            amount=Decimal(row[2]),
            transaction_date=date.fromisoformat(row[3]),
            description=row[4],
            type=row[5],
            category=Category(id=row[6], name=row[7], type=row[8]),
        )
