"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest

from cli.migrate import apply_pending
from config import Config, get_migrations_dir
from db.store import Store
from services.base import Services
from services.defaults import install_defaults


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "basket",
        db_data_dir=tmp_path / "basket" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "basket" / "logs",
    )


class TestDatabaseManager:
    """Database manager that hands out one shared in-memory connection."""

    __test__ = False

    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        """Return a context manager for the test connection."""
        return _TestConnectionContext(self.conn)

    def database_exists(self):
        return True

    def get_migrations_dir(self):
        """Get the migrations directory path."""
        return get_migrations_dir()


class _TestConnectionContext:
    """Context manager for test database connections."""

    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Don't close the connection - let the fixture handle it
        pass


@pytest.fixture
def db_manager(test_db):
    """DatabaseManager over the in-memory database, without any schema."""
    return TestDatabaseManager(test_db)


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a DatabaseManager with schema already set up.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        TestDatabaseManager: Database manager with schema ready.
    """
    db_manager = TestDatabaseManager(test_db)
    apply_pending(db_manager)
    return db_manager


@pytest.fixture
def store(db_manager_with_schema):
    """Empty key/value store."""
    return Store(db_manager_with_schema)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container over an empty store.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def seeded_services(services):
    """Services container with the default categories and items installed."""
    install_defaults(services.store)
    return services
