"""First-run seed data and import of the name-based legacy layout."""

import json
from pathlib import Path
from typing import Dict, List, Optional

from config import get_seed_path
from db.store import (
    CATEGORIES,
    EXPENSES,
    ITEM_CATEGORY_MAP,
    next_record_id,
    record_keys,
)
from logger import get_logger
from models.category import FALLBACK_CATEGORY
from models.expense import parse_amount, parse_date

logger = get_logger("services.defaults")


def load_seed(seed_path: Optional[Path] = None) -> Dict:
    """Read the default records from the seed JSON file."""
    with open(seed_path or get_seed_path(), "r") as f:
        return json.load(f)


def install_defaults(store, seed_path: Optional[Path] = None) -> List[str]:
    """Install seed data for every record that was never saved.

    Records that already exist are left alone, even when empty, so a user who
    deleted every category does not get the defaults back.

    Args:
        store: Store instance to seed.
        seed_path: Optional override of the seed file.

    Returns:
        Keys of the records that were installed.
    """
    missing = [key for key in record_keys() if not store.exists(key)]
    if not missing:
        return []

    seed = load_seed(seed_path)
    store.save_many({key: seed.get(key, store.load(key)) for key in missing})
    logger.info(f"Installed default records: {', '.join(missing)}")
    return missing


def import_legacy(store, payload: Dict) -> Dict[str, int]:
    """Replace the stored records with data in the legacy name-based layout.

    In the legacy layout expenses carry a ``category`` name and the item map
    is valued by category names. Names are matched against the imported
    category list (first match wins); unknown names become new categories.

    Args:
        store: Store instance to write to.
        payload: Dict with "expenses", "categories" and "itemCategoryMap".

    Returns:
        Counts of imported expenses, categories and item mappings.

    Raises:
        ValueError: If an expense has an unparseable date or amount.
        KeyError: If an expense is missing a required field.
    """
    categories = [
        {"id": int(c["id"]), "name": c["name"]}
        for c in payload.get("categories", [])
    ]
    ids_by_name: Dict[str, int] = {}
    for category in categories:
        ids_by_name.setdefault(category["name"], category["id"])

    def category_id_for(name: Optional[str]) -> int:
        name = name or FALLBACK_CATEGORY
        if name not in ids_by_name:
            category_id = next_record_id(c["id"] for c in categories)
            categories.append({"id": category_id, "name": name})
            ids_by_name[name] = category_id
            logger.info(f"Created category '{name}' for legacy data")
        return ids_by_name[name]

    category_id_for(FALLBACK_CATEGORY)

    item_map = {
        item.strip().lower(): category_id_for(name)
        for item, name in payload.get("itemCategoryMap", {}).items()
    }

    expenses = []
    for row in payload.get("expenses", []):
        expenses.append(
            {
                "id": int(row["id"]),
                "date": parse_date(row["date"]).isoformat(),
                "amount": float(parse_amount(row["amount"])),
                "item": row["item"],
                "category_id": category_id_for(row.get("category")),
            }
        )

    store.save_many(
        {
            CATEGORIES: categories,
            ITEM_CATEGORY_MAP: item_map,
            EXPENSES: expenses,
        }
    )

    counts = {
        "expenses": len(expenses),
        "categories": len(categories),
        "items": len(item_map),
    }
    logger.info(
        f"Imported {counts['expenses']} expenses, {counts['categories']} "
        f"categories and {counts['items']} item mappings"
    )
    return counts
