"""Aggregate structures handed to report rendering."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from models.expense import Expense


@dataclass
class CategorySummary:
    """Spending for one category.

    Attributes:
        total: Sum of amounts.
        count: Number of expenses.
        items: The constituent expenses, in the order they were summarized.
    """

    total: Decimal = Decimal("0")
    count: int = 0
    items: List[Expense] = field(default_factory=list)

    def add(self, expense: Expense) -> None:
        self.total += expense.amount
        self.count += 1
        self.items.append(expense)


@dataclass
class ItemSummary:
    """Spending for one item label within a category."""

    total: Decimal = Decimal("0")
    count: int = 0
    expenses: List[Expense] = field(default_factory=list)

    def add(self, expense: Expense) -> None:
        self.total += expense.amount
        self.count += 1
        self.expenses.append(expense)
