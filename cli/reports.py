#!/usr/bin/env python3

import sys
from datetime import date

from cli.expenses import parse_month
from logger import get_logger
from tools.reports import category_detail, monthly_summary, trailing_window

logger = get_logger()


def _month_label(year: int, month: int) -> str:
    return date(year, month, 1).strftime("%B %Y")


def cmd_monthly(args, services):
    """Show the per-category breakdown for a month."""
    year, month = args.month or (date.today().year, date.today().month)
    currency = services.config.currency_symbol

    summary = monthly_summary(services, year, month)
    if not summary:
        logger.info("No expenses found for this month.")
        return

    logger.info(f"\nExpenses for {_month_label(year, month)}:")
    logger.info("=" * 80)
    for name in sorted(summary):
        data = summary[name]
        noun = "expense" if data.count == 1 else "expenses"
        logger.info(f"{name:<16} {currency}{data.total:>10.2f}  {data.count} {noun}")
    logger.info("-" * 80)
    total = sum(data.total for data in summary.values())
    logger.info(f"{'Total':<16} {currency}{total:>10.2f}")


def cmd_category(args, services):
    """Show one category's expenses for a month, grouped by item."""
    year, month = args.month or (date.today().year, date.today().month)
    currency = services.config.currency_symbol

    detail = category_detail(services, args.category, year, month)
    if not detail:
        logger.info("No expenses found in this category for this month.")
        return

    logger.info(f"\n{args.category} - {_month_label(year, month)}")
    logger.info("=" * 80)
    for item in sorted(detail):
        data = detail[item]
        noun = "entry" if data.count == 1 else "entries"
        logger.info(f"{item.capitalize()} ({data.count} {noun})")
        logger.info(f"  Total: {currency}{data.total:.2f}")
        for expense in data.expenses:
            logger.info(
                f"  {expense.date.isoformat()}  {currency}{expense.amount:.2f}  (ID: {expense.id})"
            )


def cmd_trend(args, services):
    """Show total spending for each of the last N months."""
    months = args.months if args.months is not None else services.config.trend_months
    currency = services.config.currency_symbol

    try:
        totals = trailing_window(services, months)
    except ValueError as e:
        logger.error(f"Invalid number of months: {e}")
        sys.exit(1)

    logger.info(f"\nTotal expenses, last {months} month(s):")
    logger.info("=" * 80)
    for month_key, total in totals.items():
        logger.info(f"{month_key}  {currency}{total:>10.2f}")


def setup_parser(subparsers):
    """Setup reports subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "reports",
        help="Spending reports",
        description="Monthly, per-category and trend reports",
    )

    reports_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    monthly_parser = reports_subparsers.add_parser(
        "monthly", help="Spending by category for a month"
    )
    monthly_parser.add_argument(
        "--month", type=parse_month, help="Month to report (YYYY-MM, default current)"
    )
    monthly_parser.set_defaults(func=cmd_monthly)

    category_parser = reports_subparsers.add_parser(
        "category", help="Spending by item within one category"
    )
    category_parser.add_argument("category", help="Category name")
    category_parser.add_argument(
        "--month", type=parse_month, help="Month to report (YYYY-MM, default current)"
    )
    category_parser.set_defaults(func=cmd_category)

    trend_parser = reports_subparsers.add_parser(
        "trend", help="Monthly totals over recent months"
    )
    trend_parser.add_argument(
        "--months", type=int, help="Number of months (default from config)"
    )
    trend_parser.set_defaults(func=cmd_trend)
