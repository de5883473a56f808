"""Expense aggregation for reports."""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta

from models.category import FALLBACK_CATEGORY
from models.expense import Expense
from models.summary import CategorySummary, ItemSummary


def summarize(
    expenses: List[Expense], category_names: Dict[int, str]
) -> Dict[str, CategorySummary]:
    """Group expenses by category name.

    Categories appear in the order they are first encountered; callers that
    need a stable display order sort the keys themselves.

    Args:
        expenses: Expenses to group.
        category_names: Map of category id to name. Ids missing from it are
            grouped under the fallback category.

    Returns:
        Dictionary mapping category name to its CategorySummary.

    Example:
        {
            "Protein": CategorySummary(
                total=Decimal("120.50"), count=1, items=[Expense(...)]
            ),
        }
    """
    summary: Dict[str, CategorySummary] = {}
    for expense in expenses:
        name = category_names.get(expense.category_id, FALLBACK_CATEGORY)
        summary.setdefault(name, CategorySummary()).add(expense)
    return summary


def summarize_items(expenses: List[Expense]) -> Dict[str, ItemSummary]:
    """Group expenses by item label, in order of first encounter."""
    summary: Dict[str, ItemSummary] = {}
    for expense in expenses:
        summary.setdefault(expense.item, ItemSummary()).add(expense)
    return summary


def monthly_summary(services, year: int, month: int) -> Dict[str, CategorySummary]:
    """Get the per-category breakdown for one month.

    Args:
        services: Services container with expense and category services.
        year: Four-digit year.
        month: Month number, 1-12.
    """
    return summarize(
        services.expenses.find_by_month(year, month), services.categories.names()
    )


def category_detail(
    services, category: str, year: int, month: int
) -> Dict[str, ItemSummary]:
    """Get one category's spending in a month, grouped by item.

    Args:
        services: Services container.
        category: Category name as it appears in the monthly summary.
        year: Four-digit year.
        month: Month number, 1-12.

    Returns:
        Dictionary mapping item label to ItemSummary; empty if the category
        has no expenses that month.
    """
    breakdown = monthly_summary(services, year, month)
    if category not in breakdown:
        return {}
    return summarize_items(breakdown[category].items)


def trailing_window(
    services, n_months: int, today: Optional[date] = None
) -> Dict[str, Decimal]:
    """Get total spending for each of the last N months.

    Each month is recomputed from the full expense list.

    Args:
        services: Services container.
        n_months: Number of months, including the current one.
        today: Reference date (defaults to today).

    Returns:
        Ordered dictionary (oldest first) mapping "YYYY/MM" to the total.

    Raises:
        ValueError: If n_months is less than 1.

    Example:
        {"2024/01": Decimal("0"), "2024/02": Decimal("35.25"), ...}
    """
    if n_months < 1:
        raise ValueError("n_months must be at least 1")

    first_of_month = (today or date.today()).replace(day=1)
    totals: Dict[str, Decimal] = {}
    for offset in range(n_months - 1, -1, -1):
        month_start = first_of_month - relativedelta(months=offset)
        breakdown = monthly_summary(services, month_start.year, month_start.month)
        month_key = f"{month_start.year:04d}/{month_start.month:02d}"
        totals[month_key] = sum(
            (s.total for s in breakdown.values()), Decimal("0")
        )
    return totals
