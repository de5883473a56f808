"""Database manager for the SQLite file backing the key/value store."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir


class DatabaseManager:
    """Opens connections to the configured SQLite database.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        The data directory is created on first use, so a fresh install only
        needs its migrations applied.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        try:
            yield conn
        finally:
            conn.close()

    def database_exists(self) -> bool:
        """Whether the database file has been created yet."""
        return self.config.db_path.exists()

    def get_migrations_dir(self):
        return get_migrations_dir()
