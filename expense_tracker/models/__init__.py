"""
Data Models Package

This package contains all Pydantic models used by the expense tracker.
All data flowing between the stores, the ledger engine and the CLI
conforms to these schemas.
"""

from expense_tracker.models.expense import (
    AddOutcome,
    BudgetConfig,
    BudgetWarning,
    DeleteOutcome,
    ExpenseCategory,
    ExpenseRecord,
    ExportResult,
)
from expense_tracker.models.commands import (
    COMMAND_MODELS,
    AddCommand,
    DeleteCommand,
    ExportCommand,
    FilterCommand,
    ListCommand,
    SetBudgetCommand,
    SummaryCommand,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "AddOutcome",
    "BudgetConfig",
    "BudgetWarning",
    "DeleteOutcome",
    "ExpenseCategory",
    "ExpenseRecord",
    "ExportResult",
    # Command models
    "COMMAND_MODELS",
    "AddCommand",
    "DeleteCommand",
    "ExportCommand",
    "FilterCommand",
    "ListCommand",
    "SetBudgetCommand",
    "SummaryCommand",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
