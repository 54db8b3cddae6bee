from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from agent.dispatcher import (
    IntentDispatcher,
    LOG_FAILURE_MESSAGE,
    LOG_SUCCESS_MESSAGE,
    NO_TRANSACTIONS_MESSAGE,
    PARSE_FAILURE_MESSAGE,
    READ_FAILURE_MESSAGE,
    coerce_amount,
    coerce_date,
    utc_today,
)
from agent.intents import (
    LogTransactionCall,
    ParseFailure,
    ReadTransactionsCall,
    UnknownFunction,
)


@pytest.fixture
def dispatcher(services):
    return IntentDispatcher(services)


class TestCoercion:
    """Tests for parameter defaulting helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (5, Decimal("5")),
            (Decimal("12.50"), Decimal("12.50")),
            ("7.25", Decimal("7.25")),
            (" 3 ", Decimal("3")),
            (-4, Decimal("-4")),
            (None, Decimal("0")),
            ("lots", Decimal("0")),
            ("$5", Decimal("0")),
            (True, Decimal("0")),
            ("NaN", Decimal("0")),
            ("Infinity", Decimal("0")),
            ([1], Decimal("0")),
        ],
    )
    def test_coerce_amount(self, value, expected):
        assert coerce_amount(value) == expected

    def test_coerce_date_parses_iso(self):
        assert coerce_date("2025-08-08") == date(2025, 8, 8)

    def test_coerce_date_parses_loose_formats(self):
        assert coerce_date("August 8, 2025") == date(2025, 8, 8)
        assert coerce_date("2025-08-08T14:30:00Z") == date(2025, 8, 8)

    @pytest.mark.parametrize("value", [None, "", "someday", "2025-13-45", 20250808])
    def test_coerce_date_defaults_to_today(self, value):
        assert coerce_date(value) == utc_today()


class TestDispatchRejections:
    """Parse failures and unknown functions."""

    def test_parse_failure_gives_fixed_message(self, dispatcher):
        message = dispatcher.dispatch(ParseFailure("invalid JSON"), "u1")

        assert message == PARSE_FAILURE_MESSAGE

    def test_unknown_function_is_named(self, dispatcher):
        message = dispatcher.dispatch(UnknownFunction("TransferFunds"), "u1")

        assert "TransferFunds" in message
        assert message != PARSE_FAILURE_MESSAGE

    def test_rejections_do_not_touch_store(self, dispatcher, services):
        dispatcher.dispatch(ParseFailure("x"), "u1")
        dispatcher.dispatch(UnknownFunction("X"), "u1")

        assert services.categories.find_all() == []


class TestDispatchLogTransaction:
    """LogTransaction dispatch."""

    def test_invalid_category_is_reclassified(self, dispatcher, services):
        message = dispatcher.dispatch(
            LogTransactionCall(
                amount=5, category="Bogus", description="taco bell", date="2025-08-08"
            ),
            "u1",
        )

        assert message == LOG_SUCCESS_MESSAGE
        (transaction,) = services.transactions.find_by_user("u1")
        assert transaction.category_name == "Food and Drinks"
        assert transaction.type == "Expense"
        assert transaction.amount == Decimal("5")
        assert transaction.transaction_date == date(2025, 8, 8)
        assert transaction.description == "taco bell"

    def test_valid_category_is_preserved(self, dispatcher, services):
        message = dispatcher.dispatch(
            LogTransactionCall(
                amount=300,
                category="Travel",
                description="flight to Tokyo",
                date="2025-08-08",
            ),
            "u1",
        )

        assert message == LOG_SUCCESS_MESSAGE
        (transaction,) = services.transactions.find_by_user("u1")
        assert transaction.category_name == "Travel"

    def test_valid_category_beats_description_keywords(self, dispatcher, services):
        dispatcher.dispatch(
            LogTransactionCall(
                amount=3, category="Health", description="coffee", date="2025-08-08"
            ),
            "u1",
        )

        (transaction,) = services.transactions.find_by_user("u1")
        assert transaction.category_name == "Health"

    def test_all_parameters_missing_uses_defaults(self, dispatcher, services):
        message = dispatcher.dispatch(LogTransactionCall(), "u1")

        assert message == LOG_SUCCESS_MESSAGE
        (transaction,) = services.transactions.find_by_user("u1")
        assert transaction.amount == Decimal("0")
        assert transaction.description == ""
        assert transaction.transaction_date == utc_today()
        # "Uncategorized" is not a required category, so the classifier decides
        assert transaction.category_name == "Services"
        assert services.categories.find_by_name("Uncategorized") is None

    def test_non_numeric_amount_defaults_to_zero(self, dispatcher, services):
        dispatcher.dispatch(
            LogTransactionCall(amount="a lot", description="gym", date="2025-08-08"),
            "u1",
        )

        (transaction,) = services.transactions.find_by_user("u1")
        assert transaction.amount == Decimal("0")
        assert transaction.category_name == "Health"

    def test_decimal_amount_precision_is_kept(self, dispatcher, services):
        dispatcher.dispatch(
            LogTransactionCall(amount=Decimal("19.99"), category="Shopping"), "u1"
        )

        (transaction,) = services.transactions.find_by_user("u1")
        assert transaction.amount == Decimal("19.99")

    def test_caller_user_id_is_used(self, dispatcher, services):
        dispatcher.dispatch(LogTransactionCall(amount=1, category="Travel"), "alice")

        assert len(services.transactions.find_by_user("alice")) == 1

    def test_store_failure_gives_failure_message(self, dispatcher, services):
        with patch.object(
            services.transactions, "create", side_effect=RuntimeError("disk full")
        ):
            message = dispatcher.dispatch(
                LogTransactionCall(amount=1, category="Travel"), "u1"
            )

        assert message == LOG_FAILURE_MESSAGE


class TestDispatchReadTransactions:
    """ReadTransactions dispatch."""

    def test_no_transactions(self, dispatcher):
        assert dispatcher.dispatch(ReadTransactionsCall(), "u1") == (
            NO_TRANSACTIONS_MESSAGE
        )

    def test_single_transaction_rendering(self, dispatcher, services):
        services.transactions.log_transaction(
            Decimal("12.50"), "Groceries", "milk and eggs", date(2025, 8, 8), "u1"
        )

        message = dispatcher.dispatch(ReadTransactionsCall(), "u1")

        assert message == "2025-08-08, 12.50, Groceries, milk and eggs"

    def test_lines_newest_first_and_limited(self, services):
        dispatcher = IntentDispatcher(services, recent_limit=2)
        for day in (1, 3, 2):
            services.transactions.log_transaction(
                Decimal(day), "Travel", f"trip {day}", date(2025, 8, day), "u1"
            )

        lines = dispatcher.dispatch(ReadTransactionsCall(), "u1").split("\n")

        assert lines == [
            "2025-08-03, 3, Travel, trip 3",
            "2025-08-02, 2, Travel, trip 2",
        ]

    def test_only_callers_transactions(self, dispatcher, services):
        services.transactions.log_transaction(
            Decimal("1"), "Travel", "taxi", date(2025, 8, 8), "someone-else"
        )

        assert dispatcher.dispatch(ReadTransactionsCall(), "u1") == (
            NO_TRANSACTIONS_MESSAGE
        )

    def test_store_failure_gives_failure_message(self, dispatcher, services):
        with patch.object(
            services.transactions, "find_recent", side_effect=RuntimeError("boom")
        ):
            message = dispatcher.dispatch(ReadTransactionsCall(), "u1")

        assert message == READ_FAILURE_MESSAGE
