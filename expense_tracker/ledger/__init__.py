"""Ledger engine package."""

from expense_tracker.ledger.engine import (
    add_expense,
    check_budget,
    delete_expense,
    list_expenses,
    monthly_total,
    next_expense_id,
    set_budget,
    summarize,
)
from expense_tracker.ledger.errors import (
    EmptyLedgerError,
    ExpenseNotFoundError,
    ExpenseValidationError,
    InvalidAmountError,
    InvalidCategoryError,
    InvalidMonthError,
    LedgerError,
    ValidationKind,
)
from expense_tracker.ledger.export import export_csv, parse_csv

__all__ = [
    # Engine
    "add_expense",
    "check_budget",
    "delete_expense",
    "list_expenses",
    "monthly_total",
    "next_expense_id",
    "set_budget",
    "summarize",
    # Export
    "export_csv",
    "parse_csv",
    # Errors
    "EmptyLedgerError",
    "ExpenseNotFoundError",
    "ExpenseValidationError",
    "InvalidAmountError",
    "InvalidCategoryError",
    "InvalidMonthError",
    "LedgerError",
    "ValidationKind",
]
