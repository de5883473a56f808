"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager
from db.store import Store


class Services:
    """Container for all application services.

    Every service shares one Store, so tests can swap the database manager
    (or the store itself) and get a consistent set of services.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config
            is not used to open the database.
        store: Optional store; built from db_manager when omitted.
    """

    def __init__(self, config: Config, db_manager=None, store=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)
        self.store = store or Store(self.db_manager)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.items import ItemMapService
        from services.expenses import ExpenseService

        self.categories = CategoryService(self.store)
        self.items = ItemMapService(self.store, self.categories)
        self.expenses = ExpenseService(self.store, self.items)
