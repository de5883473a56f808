#!/usr/bin/env python3
"""
Basket CLI - track grocery expenses and see where the money goes.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    expenses     Add, edit, delete and list expenses
    categories   Manage categories
    items        Manage the item -> category map
    reports      Monthly, per-category and trend reports
    migrate      Database migrations and legacy imports

Examples:
    python -m cli expenses add chicken 120.50 --date 2024-03-15
    python -m cli expenses list --month 2024-03
    python -m cli items set paneer Dairy
    python -m cli reports monthly --month 2024-03
    python -m cli reports trend --months 6
"""

import sys
import argparse
from cli import categories, expenses, items, migrate, reports
from cli.migrate import apply_pending
from config import load_config
from services.base import Services
from services.defaults import install_defaults
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Basket - Personal expense tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    expenses.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    items.setup_parser(subparsers)
    reports.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)
            db_manager = DatabaseManager(config)

            if args.command == "migrate":
                # Migrate commands work on the raw database
                args.func(args, db_manager)
                return

            # First run: create the schema and install the default records
            apply_pending(db_manager)
            services = Services(config, db_manager=db_manager)
            install_defaults(services.store)

            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
