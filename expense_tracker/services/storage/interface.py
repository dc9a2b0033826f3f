"""
Abstract Storage Interface

DESIGN DECISION: The ledger and the budget config are each kept behind
a two-method store (load / save). This allows us to:
1. Keep the ledger engine free of I/O
2. Use in-memory storage for testing
3. Swap the JSON files for another backend without touching the engine

Stores hand out whole documents and take whole documents back.
They never assign or change expense ids.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import BudgetConfig, ExpenseRecord


class LedgerStoreInterface(ABC):
    """
    Abstract interface for the ledger document.
    """

    @abstractmethod
    def load(self) -> list[ExpenseRecord]:
        """
        Load the full ledger in stored order.

        Returns:
            The records, or an empty list when the document is absent
            or unreadable
        """
        pass

    @abstractmethod
    def save(self, expenses: list[ExpenseRecord]) -> None:
        """
        Replace the stored ledger with `expenses` in one write.

        Raises:
            StorageError: If the write fails
        """
        pass


class ConfigStoreInterface(ABC):
    """
    Abstract interface for the budget config document.
    """

    @abstractmethod
    def load(self) -> BudgetConfig:
        """
        Load the config.

        Returns:
            The stored config; a default config when the document is
            absent; a config with an undefined budget when the document
            is unreadable
        """
        pass

    @abstractmethod
    def save(self, config: BudgetConfig) -> None:
        """
        Replace the stored config.

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ParseError(StorageError):
    """A stored document exists but could not be parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not parse {path}: {reason}")
        self.path = path
        self.reason = reason
