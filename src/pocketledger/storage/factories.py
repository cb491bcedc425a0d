"""Storage factory functions for creating storage instances."""

import os
from pathlib import Path
from typing import Optional

from pocketledger.storage.memory import InMemoryStorage
from pocketledger.storage.sqlalchemy_store import SQLAlchemyStorage

DATA_DIR_NAME = ".pocketledger"


def default_data_dir() -> Path:
    """Return ~/.pocketledger, creating it if needed."""
    data_dir = Path.home() / DATA_DIR_NAME
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_storage(database_path: Optional[str] = None) -> SQLAlchemyStorage:
    """Create a SQLite storage instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            POCKETLEDGER_DB_PATH environment variable, then defaults to
            ~/.pocketledger/pocketledger.db

    Returns:
        SQLAlchemyStorage instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("POCKETLEDGER_DB_PATH")

    if database_path is None:
        database_path = str(default_data_dir() / "pocketledger.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyStorage(database_url)


def create_memory_storage() -> InMemoryStorage:
    """Create an empty process-local storage instance."""
    return InMemoryStorage()
