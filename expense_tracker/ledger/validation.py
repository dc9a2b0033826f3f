"""
Input Validation

The ledger engine runs every caller-supplied value through these
checks before it builds any new state. The CLI validates shape at its
own boundary too, but the engine never relies on that.

IMPORTANT: Validation NEVER silently fixes values beyond normalizing
case and numeric type. Anything else is rejected with a typed error.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from expense_tracker.ledger.errors import (
    InvalidAmountError,
    InvalidCategoryError,
    InvalidMonthError,
)
from expense_tracker.models.expense import ExpenseCategory


AmountLike = Union[Decimal, int, float, str]

ALL_TIME = 0
FIRST_MONTH = 1
LAST_MONTH = 12


def validate_amount(value: AmountLike, field: str = "amount") -> Decimal:
    """
    Coerce `value` to a Decimal and require it to be finite and > 0.

    Raises:
        InvalidAmountError: for non-numeric, NaN, infinite, zero or
            negative values
    """
    if isinstance(value, bool):
        raise InvalidAmountError(
            f"Please provide a valid positive number for {field}.", value
        )
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(
            f"Please provide a valid positive number for {field}.", value
        ) from None

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(
            f"Please provide a valid positive number for {field}.", value
        )
    return amount


def validate_category(value: Union[ExpenseCategory, str]) -> ExpenseCategory:
    """Resolve `value` to an ExpenseCategory, ignoring case."""
    if isinstance(value, ExpenseCategory):
        return value
    try:
        return ExpenseCategory(str(value).strip().lower())
    except ValueError:
        raise InvalidCategoryError(
            "Please provide a valid category: "
            + ", ".join(ExpenseCategory.choices())
            + ".",
            value,
        ) from None


def validate_month(value: int) -> int:
    """
    Accept 0 (all time) or a calendar month 1-12.

    Earlier releases only accepted 1-11 (`month < 12`); December is
    accepted.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidMonthError(
            "Please provide a valid month (1-12) or nothing for all time summary.",
            value,
        )
    if value == ALL_TIME or FIRST_MONTH <= value <= LAST_MONTH:
        return value
    raise InvalidMonthError(
        "Please provide a valid month (1-12) or nothing for all time summary.",
        value,
    )
