"""Storage layer for pocketledger application."""

from pocketledger.storage.base import Storage
from pocketledger.storage.factories import create_memory_storage, create_sqlite_storage

__all__ = ["Storage", "create_memory_storage", "create_sqlite_storage"]
