"""Item-category map service and the item classifier."""

from typing import Dict, List

from db.store import ITEM_CATEGORY_MAP
from logger import get_logger
from models.category import Category

logger = get_logger("services.items")


def normalize_item(item: str) -> str:
    """Normalize an item label into its map key (trimmed, lowercase)."""
    return (item or "").strip().lower()


class ItemMapService:
    """Service for the learned item -> category mapping."""

    def __init__(self, store, categories):
        """Initialize the item map service.

        Args:
            store: Store instance holding the persisted records.
            categories: CategoryService used to resolve category ids.
        """
        self.store = store
        self.categories = categories

    def _load(self) -> Dict[str, int]:
        return self.store.load(ITEM_CATEGORY_MAP)

    def classify(self, item: str) -> Category:
        """Assign a category to an item label.

        Lookup is case and whitespace insensitive. Unmapped items, and items
        mapped to a category that no longer exists, get the fallback category.
        """
        category_id = self._load().get(normalize_item(item))
        if category_id is None:
            return self.categories.fallback()
        return self.categories.resolve(category_id)

    def find_all(self) -> Dict[str, Category]:
        """Get every mapping with its category resolved, sorted by item."""
        item_map = self._load()
        names = self.categories.names()
        fallback = None
        result = {}
        for item in sorted(item_map):
            category_id = item_map[item]
            if category_id in names:
                result[item] = Category(id=category_id, name=names[category_id])
            else:
                fallback = fallback or self.categories.fallback()
                result[item] = fallback
        return result

    def items(self) -> List[str]:
        """Get the sorted list of known item labels."""
        return sorted(self._load())

    def upsert(self, item: str, category_id: int) -> bool:
        """Insert or overwrite the mapping for an item.

        Args:
            item: Item label; stored trimmed and lowercased.
            category_id: ID of the category to map to.

        Returns:
            True if saved, False if the item is empty or the category is
            missing or unknown.
        """
        key = normalize_item(item)
        if not key or category_id is None:
            return False
        category = self.categories.find(category_id)
        if category is None:
            return False

        item_map = self._load()
        item_map[key] = category.id
        self.store.save(ITEM_CATEGORY_MAP, item_map)
        logger.info(f"Mapped '{key}' to '{category.name}'")
        return True

    def remove(self, item: str) -> bool:
        """Remove the mapping for an item if present.

        Returns:
            True if a mapping was removed, False if there was none.
        """
        key = normalize_item(item)
        item_map = self._load()
        if key not in item_map:
            return False

        del item_map[key]
        self.store.save(ITEM_CATEGORY_MAP, item_map)
        logger.info(f"Removed mapping for '{key}'")
        return True
