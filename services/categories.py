"""Category service for store operations."""

from typing import Dict, List, Optional

from db.store import CATEGORIES, EXPENSES, ITEM_CATEGORY_MAP, next_record_id
from logger import get_logger
from models.category import FALLBACK_CATEGORY, Category
from models.decision import DeleteResult, Outcome

logger = get_logger("services.categories")


def _fallback_id(categories: List[Category]) -> Optional[int]:
    return next((c.id for c in categories if c.name == FALLBACK_CATEGORY), None)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, store):
        """Initialize the category service.

        Args:
            store: Store instance holding the persisted records.
        """
        self.store = store

    def _load(self) -> List[Category]:
        return [Category.from_dict(row) for row in self.store.load(CATEGORIES)]

    def _save(self, categories: List[Category]) -> None:
        self.store.save(CATEGORIES, [c.to_dict() for c in categories])

    def find_all(self) -> List[Category]:
        """Get all categories.

        Returns:
            List of Category objects, in creation order.
        """
        return self._load()

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Returns:
            Category object if found, None otherwise.
        """
        for category in self._load():
            if category.id == category_id:
                return category
        return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get the first category with the given name (case-sensitive).

        Returns:
            Category object if found, None otherwise.
        """
        for category in self._load():
            if category.name == name:
                return category
        return None

    def names(self) -> Dict[int, str]:
        """Map of category id to name, used to resolve references."""
        return {category.id: category.name for category in self._load()}

    def is_fallback(self, category: Category) -> bool:
        """Whether this is the one reserved fallback record.

        Only the first category named Other is reserved; the check is by id.
        """
        return _fallback_id(self._load()) == category.id

    def fallback(self) -> Category:
        """Get the reserved fallback category, creating it if missing."""
        category = self.find_by_name(FALLBACK_CATEGORY)
        if category is None:
            logger.warning(f"Fallback category '{FALLBACK_CATEGORY}' missing, recreating")
            category = self._append(FALLBACK_CATEGORY)
        return category

    def resolve(self, category_id: int) -> Category:
        """Get the category an id refers to, or the fallback if it is gone."""
        return self.find(category_id) or self.fallback()

    def _append(self, name: str) -> Category:
        categories = self._load()
        category = Category(
            id=next_record_id(c.id for c in categories), name=name
        )
        categories.append(category)
        self._save(categories)
        return category

    def create(self, name: str) -> Optional[Category]:
        """Create a new category.

        Args:
            name: Category name. Surrounding whitespace is stripped.

        Returns:
            The created Category, or None if the name is empty or the
            reserved fallback name.
        """
        name = (name or "").strip()
        if not name or name == FALLBACK_CATEGORY:
            return None

        category = self._append(name)
        logger.info(f"Created category '{category.name}' (ID: {category.id})")
        return category

    def rename(self, category_id: int, new_name: str) -> Optional[Category]:
        """Rename a category in place.

        Expenses and item mappings reference the id, so they pick up the new
        name without being rewritten.

        Returns:
            The renamed Category, or None if the name is empty or reserved,
            the category does not exist, or it is the fallback category.
        """
        new_name = (new_name or "").strip()
        if not new_name or new_name == FALLBACK_CATEGORY:
            return None

        categories = self._load()
        fallback_id = _fallback_id(categories)
        for category in categories:
            if category.id != category_id:
                continue
            if category.id == fallback_id:
                logger.warning(f"Refusing to rename '{FALLBACK_CATEGORY}'")
                return None
            old_name = category.name
            category.name = new_name
            self._save(categories)
            logger.info(f"Renamed category '{old_name}' to '{new_name}'")
            return category

        return None

    def delete(self, category_id: int, confirmed: bool = False) -> DeleteResult:
        """Delete a category, moving its dependents to the fallback category.

        A category that no expense references is deleted outright. Otherwise
        the caller must confirm; nothing changes until it does. On confirmation
        the expenses, item mappings and category list are saved together.

        Args:
            category_id: The category ID to delete.
            confirmed: Whether the user agreed to reassign referencing expenses.

        Returns:
            DeleteResult with ``affected`` set to the number of expenses that
            reference the category.
        """
        categories = self._load()
        category = next((c for c in categories if c.id == category_id), None)
        if category is None:
            return DeleteResult(Outcome.NOT_FOUND)
        if category.id == _fallback_id(categories):
            return DeleteResult(Outcome.PROTECTED)

        expenses = self.store.load(EXPENSES)
        affected = sum(1 for e in expenses if e["category_id"] == category_id)
        if not affected:
            # Item mappings left pointing here resolve to the fallback on read
            self._save([c for c in categories if c.id != category_id])
            logger.info(f"Deleted unused category '{category.name}'")
            return DeleteResult(Outcome.DONE)
        if not confirmed:
            return DeleteResult(Outcome.NEEDS_CONFIRMATION, affected)

        # Look up the fallback before filtering so a recreated one is kept
        fallback_id = self.fallback().id
        categories = [c for c in self._load() if c.id != category_id]

        for expense in expenses:
            if expense["category_id"] == category_id:
                expense["category_id"] = fallback_id

        item_map = self.store.load(ITEM_CATEGORY_MAP)
        for item, mapped_id in item_map.items():
            if mapped_id == category_id:
                item_map[item] = fallback_id

        self.store.save_many(
            {
                EXPENSES: expenses,
                ITEM_CATEGORY_MAP: item_map,
                CATEGORIES: [c.to_dict() for c in categories],
            }
        )
        logger.info(
            f"Deleted category '{category.name}', "
            f"moved {affected} expense(s) to '{FALLBACK_CATEGORY}'"
        )
        return DeleteResult(Outcome.DONE, affected)
