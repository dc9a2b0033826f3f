"""
Storage Services Package

Provides abstract interfaces and concrete implementations for the
ledger and config documents: JSON files for normal use, in-memory
stores for tests.
"""

from expense_tracker.services.storage.interface import (
    ConfigStoreInterface,
    LedgerStoreInterface,
    ParseError,
    StorageError,
)
from expense_tracker.services.storage.json_store import (
    JsonConfigStore,
    JsonLedgerStore,
)
from expense_tracker.services.storage.memory import (
    InMemoryConfigStore,
    InMemoryLedgerStore,
)

__all__ = [
    # Interfaces
    "ConfigStoreInterface",
    "LedgerStoreInterface",
    # Exceptions
    "ParseError",
    "StorageError",
    # JSON implementation
    "JsonConfigStore",
    "JsonLedgerStore",
    # In-memory implementation
    "InMemoryConfigStore",
    "InMemoryLedgerStore",
]
