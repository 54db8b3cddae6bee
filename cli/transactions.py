#!/usr/bin/env python3

import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from agent.dispatcher import format_transaction, utc_today
from tools.transactions import get_monthly_summary, get_spending_summary
from logger import get_logger

logger = get_logger()


def cmd_log(args, services):
    """Log an expense directly, without going through the agent.

    Args:
        args: Parsed command-line arguments (amount, description, category, date, user)
        services: Services container with the transaction service
    """
    try:
        amount = Decimal(args.amount)
    except InvalidOperation:
        logger.error(f"Invalid amount: {args.amount}")
        sys.exit(1)

    if not amount.is_finite():
        logger.error(f"Invalid amount: {args.amount}")
        sys.exit(1)

    if args.date:
        try:
            transaction_date = date.fromisoformat(args.date)
        except ValueError:
            logger.error(f"Invalid date '{args.date}'. Use YYYY-MM-DD.")
            sys.exit(1)
    else:
        transaction_date = utc_today()

    ok = services.transactions.log_transaction(
        amount, args.category, args.description, transaction_date, args.user
    )
    if not ok:
        logger.error("Failed to log transaction.")
        sys.exit(1)

    logger.info("✓ Transaction logged.")


def cmd_list(args, services):
    """List a user's most recent transactions."""
    transactions = services.transactions.find_recent(args.user, args.limit)

    if not transactions:
        logger.info("No transactions found.")
        return

    for transaction in transactions:
        logger.info(format_transaction(transaction))


def cmd_summary(args, services):
    """Show per-category expense totals for a month."""
    summary = get_monthly_summary(services, args.user, args.month, args.year)

    if not summary:
        logger.info("No expenses for that month.")
        return

    for item in summary:
        logger.info(f"{item.category:<20} {item.total_amount:>12.2f}")


def cmd_spending(args, services):
    """Summarize income or spending over a named period."""
    logger.info(
        get_spending_summary(
            services, args.user, args.period, args.type, args.category
        )
    )


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Log and review transactions",
        description="Log expenses and review transaction history",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions log
    log_parser = transactions_subparsers.add_parser(
        "log", help="Log an expense (category inferred when not recognized)"
    )
    log_parser.add_argument("amount", help="Amount, e.g. 12.50")
    log_parser.add_argument("description", help="What the money was spent on")
    log_parser.add_argument("--category", default="", help="Category name")
    log_parser.add_argument("--date", help="Date in YYYY-MM-DD (default: today)")
    log_parser.add_argument("--user", required=True, help="User ID")
    log_parser.set_defaults(func=cmd_log)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List recent transactions"
    )
    list_parser.add_argument("--user", required=True, help="User ID")
    list_parser.add_argument(
        "--limit", type=int, default=10, help="Number of transactions (default: 10)"
    )
    list_parser.set_defaults(func=cmd_list)

    # transactions summary
    summary_parser = transactions_subparsers.add_parser(
        "summary", help="Monthly expense totals by category"
    )
    summary_parser.add_argument("--user", required=True, help="User ID")
    summary_parser.add_argument("--month", type=int, help="Month 1-12 (default: current)")
    summary_parser.add_argument("--year", type=int, help="Year (default: current)")
    summary_parser.set_defaults(func=cmd_summary)

    # transactions spending
    spending_parser = transactions_subparsers.add_parser(
        "spending", help="Totals for a period such as 'this month' or '2024'"
    )
    spending_parser.add_argument("period", help="this month, last month, this year, last year, or YYYY")
    spending_parser.add_argument("--user", required=True, help="User ID")
    spending_parser.add_argument(
        "--type", default="All", help="Income, Expense or All (default: All)"
    )
    spending_parser.add_argument("--category", help="Restrict to one category")
    spending_parser.set_defaults(func=cmd_spending)
