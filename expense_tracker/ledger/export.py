"""
Flat-Text Export

Renders the ledger as comma-separated text:

    ID,Category,Date,Amount,Description
    1,food,2024-07-03,12.50,"Lunch"

Amounts always carry two decimals. The description is always quoted,
with embedded quotes doubled, so commas, quotes and newlines inside a
description survive a round trip through any CSV reader.
"""

import csv
import io
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from expense_tracker.ledger.errors import EmptyLedgerError
from expense_tracker.models.expense import ExpenseRecord


EXPORT_HEADER = ("ID", "Category", "Date", "Amount", "Description")

CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """Two-decimal rendering, rounding half up."""
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


def quote_field(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def export_csv(expenses: Sequence[ExpenseRecord]) -> str:
    """
    Header row plus one row per expense, in stored order.

    Raises:
        EmptyLedgerError: there are no expenses
    """
    if not expenses:
        raise EmptyLedgerError()

    rows = [",".join(EXPORT_HEADER)]
    for expense in expenses:
        rows.append(",".join([
            str(expense.id),
            expense.category.value,
            expense.date.isoformat(),
            format_amount(expense.amount),
            quote_field(expense.description),
        ]))
    return "\n".join(rows)


def parse_csv(text: str) -> list[ExpenseRecord]:
    """
    Read text produced by export_csv back into records.

    Amounts come back at two-decimal precision.
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    header = next(reader, None)
    if header is None:
        return []
    if tuple(header) != EXPORT_HEADER:
        raise ValueError(f"Unexpected export header: {header}")

    return [
        ExpenseRecord(
            id=int(expense_id),
            category=category,
            date=on_date,
            amount=Decimal(amount),
            description=description,
        )
        for expense_id, category, on_date, amount, description in reader
    ]
