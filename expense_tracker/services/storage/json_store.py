"""
JSON File Storage Implementation

The ledger and the config each live in one JSON document:

    expenses.json   [{"id": 1, "category": "food", ...}, ...]
    config.json     {"monthlyBudget": 0}

TRADEOFFS:
- Whole-document rewrite on every save (fine for a personal ledger)
- No locking: two processes writing at once means last writer wins

Unreadable documents are never fatal. The store logs the problem and
falls back to an empty default, and leaves the bad file alone until
the next successful save replaces it.
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

import structlog
from pydantic import TypeAdapter, ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import BudgetConfig, ExpenseRecord
from expense_tracker.services.storage.interface import (
    ConfigStoreInterface,
    LedgerStoreInterface,
    ParseError,
    StorageError,
)


_ledger_adapter = TypeAdapter(list[ExpenseRecord])

logger = structlog.get_logger(__name__)


class _JsonDocument:
    """
    Shared read/write helpers for one JSON file.
    """

    store_name = "document"

    def __init__(
        self,
        path: Union[str, Path],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.path = Path(path)
        self._audit_logger = audit_logger

    def _read(self) -> Any:
        """
        Read and decode the document.

        Raises:
            ParseError: If the file can't be read or isn't valid JSON
        """
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ParseError(str(self.path), str(e)) from e

    def _write(self, document: Any) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}") from e

    def _report_parse_error(self, error: ParseError) -> None:
        if self._audit_logger:
            self._audit_logger.log_store_parse_failed(
                store=self.store_name,
                path=error.path,
                error_message=error.reason,
            )
        else:
            logger.error(
                "store_parse_failed",
                store=self.store_name,
                path=error.path,
                error=error.reason,
            )


class JsonLedgerStore(_JsonDocument, LedgerStoreInterface):
    """
    Ledger document backed by a JSON array of expense objects.
    """

    store_name = "ledger"

    def load(self) -> list[ExpenseRecord]:
        if not self.path.exists():
            return []
        try:
            return self._parse(self._read())
        except ParseError as e:
            self._report_parse_error(e)
            return []

    def _parse(self, document: Any) -> list[ExpenseRecord]:
        try:
            return _ledger_adapter.validate_python(document)
        except ValidationError as e:
            raise ParseError(str(self.path), str(e)) from e

    def save(self, expenses: list[ExpenseRecord]) -> None:
        self._write(_ledger_adapter.dump_python(expenses, mode="json"))


class JsonConfigStore(_JsonDocument, ConfigStoreInterface):
    """
    Config document backed by a JSON object.

    A missing file is created on first load with a budget of 0.
    """

    store_name = "config"

    def load(self) -> BudgetConfig:
        if not self.path.exists():
            config = BudgetConfig()
            self.save(config)
            return config
        try:
            return self._parse(self._read())
        except ParseError as e:
            self._report_parse_error(e)
            return BudgetConfig(monthly_budget=None)

    def _parse(self, document: Any) -> BudgetConfig:
        if not isinstance(document, dict):
            raise ParseError(str(self.path), "config must be a JSON object")
        try:
            # A document without the key means "budget undefined", not 0
            return BudgetConfig.model_validate({"monthlyBudget": None, **document})
        except ValidationError as e:
            raise ParseError(str(self.path), str(e)) from e

    def save(self, config: BudgetConfig) -> None:
        self._write(config.model_dump(mode="json", by_alias=True))
