"""
Ledger Errors

All engine failures are exceptions deriving from LedgerError. None of
them is fatal: the CLI catches LedgerError, prints a message and exits
normally. The engine raises before building any new ledger state, so
a caught error never leaves a half-applied change behind.
"""

from enum import Enum


class ValidationKind(str, Enum):
    INVALID_AMOUNT = "invalid_amount"
    INVALID_CATEGORY = "invalid_category"
    INVALID_MONTH = "invalid_month"


class LedgerError(Exception):
    """Base exception for ledger engine operations."""
    pass


class ExpenseValidationError(LedgerError):
    """An input to the engine was rejected."""

    kind: ValidationKind

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class InvalidAmountError(ExpenseValidationError):
    """Amount is not a finite number greater than zero."""
    kind = ValidationKind.INVALID_AMOUNT


class InvalidCategoryError(ExpenseValidationError):
    """Category is not one of the recognized categories."""
    kind = ValidationKind.INVALID_CATEGORY


class InvalidMonthError(ExpenseValidationError):
    """Month is neither 0 (all time) nor a calendar month."""
    kind = ValidationKind.INVALID_MONTH


class ExpenseNotFoundError(LedgerError):
    """No expense carries the requested id."""

    def __init__(self, expense_id: int):
        super().__init__(f"No expense found with ID: {expense_id}")
        self.expense_id = expense_id


class EmptyLedgerError(LedgerError):
    """The ledger has no records to export."""

    def __init__(self, message: str = "No expenses to export."):
        super().__init__(message)
