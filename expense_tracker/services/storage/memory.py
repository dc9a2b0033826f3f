"""
In-Memory Storage Implementation

Keeps documents in process memory. Used by the test suite and by
callers that embed the engine without touching the filesystem.
"""

from typing import Optional

from expense_tracker.models.expense import BudgetConfig, ExpenseRecord
from expense_tracker.services.storage.interface import (
    ConfigStoreInterface,
    LedgerStoreInterface,
)


class InMemoryLedgerStore(LedgerStoreInterface):
    """Ledger store holding a list in memory."""

    def __init__(self, expenses: Optional[list[ExpenseRecord]] = None):
        self._expenses: list[ExpenseRecord] = list(expenses or [])
        self.save_count = 0

    def load(self) -> list[ExpenseRecord]:
        return list(self._expenses)

    def save(self, expenses: list[ExpenseRecord]) -> None:
        self._expenses = list(expenses)
        self.save_count += 1


class InMemoryConfigStore(ConfigStoreInterface):
    """Config store holding a single BudgetConfig in memory."""

    def __init__(self, config: Optional[BudgetConfig] = None):
        self._config = config if config is not None else BudgetConfig()
        self.save_count = 0

    def load(self) -> BudgetConfig:
        return self._config.model_copy()

    def save(self, config: BudgetConfig) -> None:
        self._config = config.model_copy()
        self.save_count += 1
