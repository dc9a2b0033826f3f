"""
Main Orchestrator for the Expense Tracker

Ties the stores, the ledger engine and the audit logger together.
Every command runs the same way:

    load stores → one engine operation → persist on success → audit

DESIGN DECISION: The flow enforces the boundaries:
- Stores are loaded fresh for every command; nothing is cached
- Nothing is written unless the engine operation succeeded
- A mutated ledger is persisted with exactly one save call
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from expense_tracker.audit import AuditLogger
from expense_tracker.config import TrackerSettings, get_settings
from expense_tracker.ledger import (
    EmptyLedgerError,
    ExpenseNotFoundError,
    ExpenseValidationError,
    add_expense,
    delete_expense,
    export_csv,
    list_expenses,
    set_budget,
    summarize,
)
from expense_tracker.ledger.export import format_amount
from expense_tracker.ledger.validation import AmountLike
from expense_tracker.models.expense import (
    AddOutcome,
    BudgetConfig,
    DeleteOutcome,
    ExpenseCategory,
    ExpenseRecord,
    ExportResult,
)
from expense_tracker.services.storage import (
    ConfigStoreInterface,
    JsonConfigStore,
    JsonLedgerStore,
    LedgerStoreInterface,
)


class ExpenseTrackerFlow:
    """
    Runs ledger commands against injected stores.

    Engine errors (LedgerError subclasses) are audited and re-raised
    for the caller to render.
    """

    def __init__(
        self,
        ledger_store: LedgerStoreInterface,
        config_store: ConfigStoreInterface,
        export_path: Union[str, Path] = "expenses.csv",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._ledger_store = ledger_store
        self._config_store = config_store
        self._export_path = Path(export_path)
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def add_expense(
        self,
        amount: AmountLike,
        description: str,
        category: Union[ExpenseCategory, str],
    ) -> AddOutcome:
        """
        Add an expense dated today and persist the ledger.

        The returned outcome carries a budget warning when this expense
        takes the month over budget.
        """
        expenses = self._ledger_store.load()
        config = self._config_store.load()

        try:
            outcome = add_expense(expenses, amount, description, category, config)
        except ExpenseValidationError as e:
            self._audit_logger.log_validation_failed(e.kind.value, str(e))
            raise

        if outcome.budget_warning:
            warning = outcome.budget_warning
            self._audit_logger.log_budget_exceeded(
                month=warning.month,
                monthly_budget=format_amount(warning.monthly_budget),
                projected_total=format_amount(warning.projected_total),
            )

        self._ledger_store.save(outcome.expenses)
        self._audit_logger.log_expense_added(
            expense_id=outcome.expense.id,
            category=outcome.expense.category.value,
            amount=format_amount(outcome.expense.amount),
        )
        return outcome

    def list_expenses(
        self,
        category: Optional[Union[ExpenseCategory, str]] = None,
    ) -> list[ExpenseRecord]:
        """List all expenses, or those of one category."""
        expenses = list_expenses(self._ledger_store.load(), category)
        self._audit_logger.log_expenses_listed(
            result_count=len(expenses),
            category=category.value if isinstance(category, ExpenseCategory) else category,
        )
        return expenses

    def summarize(self, month: int = 0) -> Decimal:
        """Total for a month (1-12), or all time for month 0."""
        try:
            total = summarize(self._ledger_store.load(), month)
        except ExpenseValidationError as e:
            self._audit_logger.log_validation_failed(e.kind.value, str(e))
            raise

        self._audit_logger.log_summary_computed(month=month, total=format_amount(total))
        return total

    def delete_expense(self, expense_id: int) -> DeleteOutcome:
        """Delete one expense, renumber the rest, and persist."""
        try:
            outcome = delete_expense(self._ledger_store.load(), expense_id)
        except ExpenseNotFoundError:
            self._audit_logger.log_expense_not_found(expense_id)
            raise

        self._ledger_store.save(outcome.expenses)
        self._audit_logger.log_expense_deleted(
            expense_id=expense_id,
            renumbered_count=outcome.renumbered_count,
        )
        return outcome

    def set_budget(self, amount: AmountLike) -> BudgetConfig:
        """Replace the monthly budget and persist the config."""
        current = self._config_store.load()
        try:
            updated = set_budget(current, amount)
        except ExpenseValidationError as e:
            self._audit_logger.log_validation_failed(e.kind.value, str(e))
            raise

        self._config_store.save(updated)
        self._audit_logger.log_budget_set(
            monthly_budget=format_amount(updated.monthly_budget),
            previous_budget=(
                format_amount(current.monthly_budget) if current.is_defined else None
            ),
        )
        return updated

    def export(self, path: Optional[Union[str, Path]] = None) -> ExportResult:
        """
        Write the ledger as flat text to `path` (default: the export path).

        Raises:
            EmptyLedgerError: nothing to export; no file is written
        """
        target = Path(path) if path else self._export_path
        expenses = self._ledger_store.load()

        try:
            content = export_csv(expenses)
        except EmptyLedgerError:
            self._audit_logger.log_export_skipped()
            raise

        try:
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            self._audit_logger.log_error(
                error_type="export_write_failed",
                error_message=str(e),
                details={"path": str(target)},
            )
            raise

        self._audit_logger.log_export_written(path=str(target), row_count=len(expenses))
        return ExportResult(path=str(target), row_count=len(expenses))


def create_app_components(
    settings: Optional[TrackerSettings] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> ExpenseTrackerFlow:
    """
    Factory function to create a flow backed by the JSON stores.

    Args:
        settings: Settings to read file locations from.
                  Defaults to the cached application settings.
        audit_logger: Logger shared by the flow and the stores.

    Returns:
        The configured ExpenseTrackerFlow
    """
    settings = settings or get_settings()
    audit_logger = audit_logger or AuditLogger()

    ledger_store = JsonLedgerStore(settings.ledger_path, audit_logger=audit_logger)
    config_store = JsonConfigStore(settings.config_path, audit_logger=audit_logger)

    return ExpenseTrackerFlow(
        ledger_store=ledger_store,
        config_store=config_store,
        export_path=settings.export_path,
        audit_logger=audit_logger,
    )
