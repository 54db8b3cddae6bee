"""Execute parsed function calls against the transaction store.

Model output is untrusted. Parse failures and unknown functions are answered
with fixed messages, and raw model text is never echoed back to the user.
Missing or malformed parameters on LogTransaction are replaced with
defaults instead of being rejected, so a reasonable transaction is still
recorded whenever possible.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, List

from dateutil import parser as date_parser

from agent.intents import (
    LogTransactionCall,
    ParsedIntent,
    ParseFailure,
    ReadTransactionsCall,
    UnknownFunction,
)
from models.transaction import Transaction
from logger import get_logger

logger = get_logger()

PARSE_FAILURE_MESSAGE = (
    "Sorry, I couldn't understand that request. Please rephrase it."
)
UNKNOWN_FUNCTION_MESSAGE = "Sorry, I don't know how to perform '{name}'."
LOG_SUCCESS_MESSAGE = "Transaction logged successfully."
LOG_FAILURE_MESSAGE = "Failed to log the transaction. Please try again."
NO_TRANSACTIONS_MESSAGE = "No transactions found."
READ_FAILURE_MESSAGE = "Failed to retrieve transactions. Please try again."

DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_RECENT_LIMIT = 10


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def coerce_amount(value: Any) -> Decimal:
    """Convert a model-supplied amount to Decimal, defaulting to 0."""
    if value is None or isinstance(value, bool):
        return Decimal("0")

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")

    if not amount.is_finite():
        return Decimal("0")
    return amount


def coerce_date(value: Any) -> date:
    """Parse a model-supplied date, defaulting to today's UTC date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return utc_today()

    try:
        return date_parser.parse(value.strip()).date()
    except (ValueError, OverflowError):
        return utc_today()


def coerce_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def format_transaction(transaction: Transaction) -> str:
    """Render one transaction as ``date, amount, category, description``."""
    return (
        f"{transaction.transaction_date.isoformat()}, {transaction.amount}, "
        f"{transaction.category_name}, {transaction.description}"
    )


class IntentDispatcher:
    """Decides which store operation a parsed intent maps to and runs it."""

    def __init__(self, services, recent_limit: int = DEFAULT_RECENT_LIMIT):
        """Initialize the dispatcher.

        Args:
            services: Services container with the transaction service.
            recent_limit: How many transactions ReadTransactions returns.
        """
        self.services = services
        self.recent_limit = recent_limit

    def dispatch(self, intent: ParsedIntent, user_id: str) -> str:
        """Run ``intent`` on behalf of ``user_id`` and return the reply text.

        Never raises: store errors become fixed failure messages.
        """
        if isinstance(intent, ParseFailure):
            logger.warning(f"Rejected model output: {intent.reason}")
            return PARSE_FAILURE_MESSAGE

        if isinstance(intent, UnknownFunction):
            logger.warning(f"Model requested unknown function '{intent.name}'")
            return UNKNOWN_FUNCTION_MESSAGE.format(name=intent.name)

        if isinstance(intent, LogTransactionCall):
            return self._log_transaction(intent, user_id)

        if isinstance(intent, ReadTransactionsCall):
            return self._read_transactions(user_id)

        logger.error(f"Unsupported intent type: {type(intent).__name__}")
        return PARSE_FAILURE_MESSAGE

    def _log_transaction(self, call: LogTransactionCall, user_id: str) -> str:
        amount = coerce_amount(call.amount)
        description = coerce_text(call.description)
        transaction_date = coerce_date(call.date)
        category = coerce_text(call.category, DEFAULT_CATEGORY)

        ok = self.services.transactions.log_transaction(
            amount, category, description, transaction_date, user_id
        )
        if ok:
            return LOG_SUCCESS_MESSAGE
        return LOG_FAILURE_MESSAGE

    def _read_transactions(self, user_id: str) -> str:
        try:
            transactions: List[Transaction] = (
                self.services.transactions.find_recent(user_id, self.recent_limit)
            )
        except Exception as e:
            logger.error(f"Failed to read transactions for user {user_id}: {e}")
            return READ_FAILURE_MESSAGE

        if not transactions:
            return NO_TRANSACTIONS_MESSAGE

        return "\n".join(format_transaction(t) for t in transactions)
