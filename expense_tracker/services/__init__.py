"""Services package."""

from expense_tracker.services.storage import (
    ConfigStoreInterface,
    InMemoryConfigStore,
    InMemoryLedgerStore,
    JsonConfigStore,
    JsonLedgerStore,
    LedgerStoreInterface,
    ParseError,
    StorageError,
)

__all__ = [
    "ConfigStoreInterface",
    "InMemoryConfigStore",
    "InMemoryLedgerStore",
    "JsonConfigStore",
    "JsonLedgerStore",
    "LedgerStoreInterface",
    "ParseError",
    "StorageError",
]
