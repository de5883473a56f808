"""Category model for expense categorization."""

from dataclasses import dataclass

# Reserved category that unmapped items and orphaned expenses fall back to.
FALLBACK_CATEGORY = "Other"


@dataclass
class Category:
    """Represents a user-defined expense category.

    Attributes:
        id: Unique identifier, referenced by expenses and item mappings.
        name: Display name (not required to be unique).
    """

    id: int
    name: str

    def to_dict(self) -> dict:
        """Convert category to dictionary for store persistence."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(id=int(data["id"]), name=data["name"])
