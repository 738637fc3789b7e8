"""Store layer - provides persistence for the application.

This module re-exports the stores and backends for easy importing.
"""

from gastos.store.backends import (
    JsonFileBackend,
    KeyValueBackend,
    SqliteBackend,
    get_data_dir,
    init_database,
)
from gastos.store.expenses import ITEMS_KEY, ExpenseStore
from gastos.store.snapshots import MONTHS_KEY, SnapshotStore

__all__ = [
    # Backends
    "JsonFileBackend",
    "KeyValueBackend",
    "SqliteBackend",
    "get_data_dir",
    "init_database",
    # Stores
    "ITEMS_KEY",
    "MONTHS_KEY",
    "ExpenseStore",
    "SnapshotStore",
]
