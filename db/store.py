"""Key/value store holding the application's three persisted records.

Each record is a JSON document saved whole under its key in the ``store``
table. Reads of a record that was never saved return an empty default.
"""

import json
import time
from typing import Any, Dict, Iterable

from logger import get_logger

logger = get_logger("store")

EXPENSES = "expenses"
CATEGORIES = "categories"
ITEM_CATEGORY_MAP = "itemCategoryMap"

_DEFAULTS = {
    EXPENSES: list,
    CATEGORIES: list,
    ITEM_CATEGORY_MAP: dict,
}


def record_keys():
    """Get the list of known record keys."""
    return list(_DEFAULTS.keys())


def next_record_id(existing_ids: Iterable[int]) -> int:
    """Allocate an id from the current time in milliseconds.

    Ids stay unique and increasing even when two records are created within
    the same millisecond or the clock moves backwards.
    """
    candidate = time.time_ns() // 1_000_000
    highest = max(existing_ids, default=0)
    return max(candidate, highest + 1)


class Store:
    """Loads and saves JSON records through a database manager.

    Args:
        db_manager: Database manager providing ``connect()``.
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def _check_key(self, key: str) -> None:
        if key not in _DEFAULTS:
            raise ValueError(f"Unknown store key: {key}")

    def load(self, key: str) -> Any:
        """Load a record.

        Args:
            key: One of the record keys.

        Returns:
            The saved value, or an empty list/dict if nothing was saved yet.

        Raises:
            ValueError: If the key is unknown.
        """
        self._check_key(key)
        with self.db_manager.connect() as conn:
            row = conn.execute(
                "SELECT value FROM store WHERE key = ?", (key,)
            ).fetchone()

        if row is None:
            return _DEFAULTS[key]()
        return json.loads(row[0])

    def save(self, key: str, value: Any) -> None:
        """Serialize and overwrite a record."""
        self.save_many({key: value})

    def save_many(self, records: Dict[str, Any]) -> None:
        """Overwrite several records in one database transaction.

        Either every record is written or none is.

        Raises:
            ValueError: If any key is unknown.
            TypeError: If a value is not JSON serializable.
        """
        for key in records:
            self._check_key(key)

        # Serialize before touching the database so a bad value writes nothing
        payloads = [(key, json.dumps(value)) for key, value in records.items()]

        with self.db_manager.connect() as conn:
            try:
                conn.executemany(
                    """
                    INSERT INTO store (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    payloads,
                )
                conn.commit()
            except Exception:
                conn.rollback()
                raise

        logger.debug(f"Saved records: {', '.join(records)}")

    def exists(self, key: str) -> bool:
        """Whether a record has ever been saved under ``key``."""
        self._check_key(key)
        with self.db_manager.connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM store WHERE key = ?", (key,)
            ).fetchone()
        return row is not None
