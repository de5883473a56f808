"""Expense service for store operations."""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from db.store import EXPENSES, next_record_id
from logger import get_logger
from models.decision import DeleteResult, Outcome
from models.expense import Expense, parse_amount, parse_date

logger = get_logger("services.expenses")


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, store, items):
        """Initialize the expense service.

        Args:
            store: Store instance holding the persisted records.
            items: ItemMapService used to classify expenses.
        """
        self.store = store
        self.items = items

    def _load(self) -> List[Expense]:
        return [Expense.from_dict(row) for row in self.store.load(EXPENSES)]

    def _save(self, expenses: List[Expense]) -> None:
        self.store.save(EXPENSES, [e.to_dict() for e in expenses])

    def create(
        self,
        expense_date: Union[date, str],
        amount: Union[Decimal, float, str],
        item: str,
    ) -> Expense:
        """Record a new expense, classifying it from its item label.

        Args:
            expense_date: Date of purchase (date or ISO string).
            amount: Amount spent.
            item: Free-text item label.

        Returns:
            The created Expense.

        Raises:
            ValueError: If the date or amount cannot be parsed.
        """
        expense_date = parse_date(expense_date)
        amount = parse_amount(amount)
        category = self.items.classify(item)

        expenses = self._load()
        expense = Expense(
            id=next_record_id(e.id for e in expenses),
            date=expense_date,
            amount=amount,
            item=item,
            category_id=category.id,
        )
        expenses.append(expense)
        self._save(expenses)

        logger.info(
            f"Added expense {expense.id}: {item} {amount} on "
            f"{expense_date.isoformat()} ({category.name})"
        )
        return expense

    def update(
        self,
        expense_id: int,
        expense_date: Union[date, str],
        amount: Union[Decimal, float, str],
        item: str,
    ) -> Optional[Expense]:
        """Overwrite an expense and re-classify it from the new item label.

        Returns:
            The updated Expense, or None if no expense has that ID.

        Raises:
            ValueError: If the date or amount cannot be parsed.
        """
        expense_date = parse_date(expense_date)
        amount = parse_amount(amount)

        expenses = self._load()
        expense = next((e for e in expenses if e.id == expense_id), None)
        if expense is None:
            return None

        category = self.items.classify(item)
        if category.id != expense.category_id:
            logger.debug(
                f"Expense {expense_id} re-classified as '{category.name}'"
            )

        expense.date = expense_date
        expense.amount = amount
        expense.item = item
        expense.category_id = category.id
        self._save(expenses)

        logger.info(f"Updated expense {expense_id}")
        return expense

    def delete(self, expense_id: int, confirmed: bool = False) -> DeleteResult:
        """Delete an expense once the user has confirmed.

        Args:
            expense_id: The expense ID to delete.
            confirmed: Whether the user agreed to the deletion.

        Returns:
            DeleteResult; NEEDS_CONFIRMATION leaves the store unchanged.
        """
        expenses = self._load()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            return DeleteResult(Outcome.NOT_FOUND)
        if not confirmed:
            return DeleteResult(Outcome.NEEDS_CONFIRMATION, 1)

        self._save(remaining)
        logger.info(f"Deleted expense {expense_id}")
        return DeleteResult(Outcome.DONE, 1)

    def find(self, expense_id: int) -> Optional[Expense]:
        """Get a single expense by ID.

        Returns:
            Expense object if found, None otherwise.
        """
        return next((e for e in self._load() if e.id == expense_id), None)

    def find_all(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> List[Expense]:
        """Get expenses, newest first.

        Args:
            year: Optional year to filter by (requires month).
            month: Optional month (1-12) to filter by (requires year).

        Returns:
            List of Expense objects ordered by date descending.
        """
        if year is not None and month is not None:
            expenses = self.find_by_month(year, month)
        else:
            expenses = self._load()
        return sorted(expenses, key=lambda e: (e.date, e.id), reverse=True)

    def find_by_month(self, year: int, month: int) -> List[Expense]:
        """Get expenses dated in one calendar month, in insertion order.

        Args:
            year: Four-digit year.
            month: Month number, 1 (January) to 12 (December).

        Returns:
            List of Expense objects in that month.
        """
        return [e for e in self._load() if e.in_month(year, month)]
