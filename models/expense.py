from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Union


def parse_date(value: Union[date, str]) -> date:
    """Parse an ISO (YYYY-MM-DD) date string, passing date objects through.

    Raises:
        ValueError: If the string is not a valid ISO date.
    """
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def parse_amount(value: Union[Decimal, float, int, str]) -> Decimal:
    """Parse an amount into a Decimal.

    Floats go through str() so 120.5 becomes Decimal("120.5") rather than
    its binary expansion.

    Raises:
        ValueError: If the value is not numeric.
    """
    if isinstance(value, Decimal):
        return value
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


@dataclass
class Expense:
    id: int  # creation timestamp in milliseconds, unique per store
    date: date
    amount: Decimal
    item: str  # free text as entered; classification lowercases it
    category_id: int

    def in_month(self, year: int, month: int) -> bool:
        return self.date.year == year and self.date.month == month

    def to_dict(self) -> dict:
        """Convert expense to dictionary for store persistence."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "amount": float(self.amount),
            "item": self.item,
            "category_id": self.category_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        return cls(
            id=int(data["id"]),
            date=parse_date(data["date"]),
            amount=parse_amount(data["amount"]),
            item=data["item"],
            category_id=int(data["category_id"]),
        )
