#!/usr/bin/env python3

import sys
from datetime import date

from cli.prompts import confirm
from logger import get_logger
from models.category import FALLBACK_CATEGORY
from models.decision import Outcome

logger = get_logger()


def format_expense(expense, categories, currency) -> str:
    category = categories.get(expense.category_id, FALLBACK_CATEGORY)
    return (
        f"{expense.id}  {expense.date.strftime('%a, %d %b %Y')}  "
        f"{expense.item.capitalize():<20} {category:<12} "
        f"{currency}{expense.amount:.2f}"
    )


def cmd_add(args, services):
    """Record a new expense."""
    try:
        expense = services.expenses.create(
            args.date or date.today(), args.amount, args.item
        )
    except ValueError as e:
        logger.error(f"Invalid expense: {e}")
        sys.exit(1)

    category = services.categories.resolve(expense.category_id)
    logger.info(f"✓ Expense added with ID: {expense.id}")
    logger.info(f"  Category: {category.name}")


def cmd_edit(args, services):
    """Edit an expense; the category is re-derived from the item."""
    current = services.expenses.find(args.expense_id)
    if current is None:
        logger.error(f"Expense with ID {args.expense_id} not found.")
        sys.exit(1)

    try:
        expense = services.expenses.update(
            args.expense_id,
            args.date or current.date,
            args.amount if args.amount is not None else current.amount,
            args.item or current.item,
        )
    except ValueError as e:
        logger.error(f"Invalid expense: {e}")
        sys.exit(1)

    if expense is None:
        logger.error(f"Expense with ID {args.expense_id} not found.")
        sys.exit(1)

    category = services.categories.resolve(expense.category_id)
    logger.info(f"✓ Expense {expense.id} updated ({category.name}).")


def cmd_delete(args, services):
    """Delete an expense by ID."""
    result = services.expenses.delete(args.expense_id)
    if result.outcome is Outcome.NOT_FOUND:
        logger.error(f"Expense with ID {args.expense_id} not found.")
        sys.exit(1)

    if not (args.yes or confirm("Are you sure you want to delete this expense?")):
        logger.info("Deletion cancelled.")
        return

    services.expenses.delete(args.expense_id, confirmed=True)
    logger.info("✓ Expense deleted successfully.")


def cmd_list(args, services):
    """List expenses, newest first."""
    year = month = None
    if args.month:
        year, month = args.month

    expenses = services.expenses.find_all(year, month)
    if not expenses:
        logger.info("No expenses found. Add some expenses to get started!")
        return

    categories = services.categories.names()
    currency = services.config.currency_symbol
    logger.info("\nExpenses:")
    logger.info("=" * 80)
    for expense in expenses:
        logger.info(format_expense(expense, categories, currency))
    logger.info("-" * 80)
    logger.info(f"Total expenses: {len(expenses)}")


def parse_month(value: str):
    """Parse a "YYYY-MM" argument into a (year, month) tuple."""
    try:
        year, month = (int(part) for part in value.split("-"))
    except ValueError:
        raise ValueError(f"Expected YYYY-MM, got {value!r}")
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month}")
    return year, month


def setup_parser(subparsers):
    """Setup expenses subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "expenses",
        help="Manage expenses",
        description="Add, edit, delete and list expenses",
    )

    expenses_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available expense commands",
        dest="subcommand",
        required=True,
    )

    add_parser = expenses_subparsers.add_parser("add", help="Record an expense")
    add_parser.add_argument("item", help="Item purchased, e.g. chicken")
    add_parser.add_argument("amount", help="Amount spent")
    add_parser.add_argument("--date", help="Purchase date (YYYY-MM-DD, default today)")
    add_parser.set_defaults(func=cmd_add)

    edit_parser = expenses_subparsers.add_parser("edit", help="Edit an expense")
    edit_parser.add_argument("expense_id", type=int, help="ID of the expense")
    edit_parser.add_argument("--item", help="New item label")
    edit_parser.add_argument("--amount", help="New amount")
    edit_parser.add_argument("--date", help="New date (YYYY-MM-DD)")
    edit_parser.set_defaults(func=cmd_edit)

    delete_parser = expenses_subparsers.add_parser("delete", help="Delete an expense")
    delete_parser.add_argument("expense_id", type=int, help="ID of the expense")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    list_parser = expenses_subparsers.add_parser("list", help="List expenses")
    list_parser.add_argument(
        "--month", type=parse_month, help="Only show one month (YYYY-MM)"
    )
    list_parser.set_defaults(func=cmd_list)
