"""
Command Models

Each CLI command is parsed into one of these models before any store
is touched. They only check shape (types, recognized options); the
ledger engine still enforces the business rules on its own.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from expense_tracker.models.expense import ExpenseCategory


class _Command(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        extra="forbid",
    )


class AddCommand(_Command):
    """`add --amount <amount> --description <text> --category <category>`"""

    amount: Decimal
    description: str
    category: ExpenseCategory

    @field_validator("category", mode="before")
    @classmethod
    def lower_category(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ListCommand(_Command):
    """`list`"""


class FilterCommand(_Command):
    """`filter --category <category>`"""

    category: str = Field(..., min_length=1)


class SummaryCommand(_Command):
    """`summary [--month <month>]`; month 0 means all time."""

    month: int = 0


class DeleteCommand(_Command):
    """`delete --id <expense_id>`"""

    id: int


class SetBudgetCommand(_Command):
    """`set-budget --amount <amount>`"""

    amount: Decimal


class ExportCommand(_Command):
    """`export`"""

    path: Optional[str] = None


COMMAND_MODELS: dict[str, type[_Command]] = {
    "add": AddCommand,
    "list": ListCommand,
    "summary": SummaryCommand,
    "delete": DeleteCommand,
    "filter": FilterCommand,
    "set-budget": SetBudgetCommand,
    "export": ExportCommand,
}
