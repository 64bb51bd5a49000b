"""Database manager for SQLite connections and path management."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from config import Config, get_migrations_dir


def get_seed_dir() -> Path:
    """Get the directory holding seed data files."""
    return Path(__file__).parent / "seed"


class DatabaseManager:
    """Manages database connections and paths.

    Connections are opened with foreign key enforcement on, so a category's
    parent_id always references an existing row.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
        finally:
            conn.close()

    def get_db_path(self) -> Path:
        return self.config.db_path

    def get_migrations_dir(self) -> Path:
        return get_migrations_dir()

    def get_seed_dir(self) -> Path:
        return get_seed_dir()
