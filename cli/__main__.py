#!/usr/bin/env python3
"""
fintrack CLI - log and review personal finances, directly or in natural language.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    agent        Talk to the finance agent
    transactions Log and review transactions
    categories   List and seed categories
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli agent ask "I spent 5 on coffee today" --user alice
    python -m cli agent stream "show my recent transactions" --user alice
    python -m cli transactions log 42.10 "weekly groceries" --user alice
    python -m cli transactions summary --user alice --month 8 --year 2025
"""

import sys
import argparse
from cli import agent, transactions, categories, migrate
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="fintrack",
        description="fintrack - Personal finance tracking with a natural-language agent",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    agent.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)
            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
