"""
Ledger Engine

Pure operations over an in-memory ledger (a list of ExpenseRecord in
id order) and the budget config. Nothing here reads or writes files:
callers load the stores, call one operation, and persist whatever
the operation returns.

GUARANTEES:
- Ids always form the dense range 1..N in insertion order
- Input lists are never mutated; every change returns a new list
- "Spending in month m" is computed in exactly one place (monthly_total)
"""

import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from expense_tracker.ledger.errors import ExpenseNotFoundError
from expense_tracker.ledger.validation import (
    ALL_TIME,
    AmountLike,
    validate_amount,
    validate_category,
    validate_month,
)
from expense_tracker.models.expense import (
    AddOutcome,
    BudgetConfig,
    BudgetWarning,
    DeleteOutcome,
    ExpenseCategory,
    ExpenseRecord,
)


ZERO = Decimal("0")


def next_expense_id(expenses: Sequence[ExpenseRecord]) -> int:
    """
    Id for the next expense: last id + 1, or 1 for an empty ledger.

    Relies on the dense-id invariant kept by delete_expense, under
    which this equals len(expenses) + 1.
    """
    if not expenses:
        return 1
    return expenses[-1].id + 1


def monthly_total(month: int, expenses: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of amounts for records dated in calendar month `month` (any year)."""
    return sum(
        (expense.amount for expense in expenses if expense.date.month == month),
        ZERO,
    )


def check_budget(
    expenses: Sequence[ExpenseRecord],
    amount: Decimal,
    on_date: datetime.date,
    config: BudgetConfig,
) -> Optional[BudgetWarning]:
    """
    Would adding `amount` on `on_date` push that month over budget?

    Returns a BudgetWarning when the month's existing spending plus
    `amount` is strictly greater than the budget. An undefined budget
    (unreadable config) never warns; a budget of 0 warns on any
    positive amount.
    """
    if not config.is_defined:
        return None

    projected = monthly_total(on_date.month, expenses) + amount
    if projected > config.monthly_budget:
        return BudgetWarning(
            month=on_date.month,
            monthly_budget=config.monthly_budget,
            projected_total=projected,
        )
    return None


def add_expense(
    expenses: Sequence[ExpenseRecord],
    amount: AmountLike,
    description: str,
    category: Union[ExpenseCategory, str],
    config: BudgetConfig,
    today: Optional[datetime.date] = None,
) -> AddOutcome:
    """
    Append a new expense dated `today` (default: the current date).

    The budget check runs against the ledger as it was before the
    append; a warning never blocks the addition.

    Raises:
        InvalidAmountError: amount is not a finite number > 0
        InvalidCategoryError: category is not recognized
    """
    value = validate_amount(amount)
    resolved_category = validate_category(category)
    on_date = today or datetime.date.today()

    warning = check_budget(expenses, value, on_date, config)

    expense = ExpenseRecord(
        id=next_expense_id(expenses),
        category=resolved_category,
        date=on_date,
        amount=value,
        description=description,
    )
    return AddOutcome(
        expense=expense,
        expenses=[*expenses, expense],
        budget_warning=warning,
    )


def list_expenses(
    expenses: Sequence[ExpenseRecord],
    category: Optional[Union[ExpenseCategory, str]] = None,
) -> list[ExpenseRecord]:
    """
    All expenses in stored order, optionally only one category.

    The filter is compared case-insensitively. A filter that names no
    known category matches nothing rather than raising.
    """
    if not category:
        return list(expenses)

    if isinstance(category, ExpenseCategory):
        wanted = category.value
    else:
        wanted = category.strip().lower()
    return [
        expense for expense in expenses
        if expense.category.value.lower() == wanted
    ]


def delete_expense(
    expenses: Sequence[ExpenseRecord],
    expense_id: int,
) -> DeleteOutcome:
    """
    Remove the expense with `expense_id` and close the gap.

    Every record after the removed one has its id decremented by one,
    so the result still uses ids 1..N-1 in their previous order.

    Raises:
        ExpenseNotFoundError: no record has `expense_id`
    """
    removed: Optional[ExpenseRecord] = None
    remaining: list[ExpenseRecord] = []
    renumbered = 0

    for expense in expenses:
        if removed is None and expense.id == expense_id:
            removed = expense
            continue
        if removed is not None:
            expense = expense.model_copy(update={"id": expense.id - 1})
            renumbered += 1
        remaining.append(expense)

    if removed is None:
        raise ExpenseNotFoundError(expense_id)

    return DeleteOutcome(
        removed=removed,
        expenses=remaining,
        renumbered_count=renumbered,
    )


def summarize(expenses: Sequence[ExpenseRecord], month: int = ALL_TIME) -> Decimal:
    """
    Total spending for `month`, or for all time when month is 0.

    Raises:
        InvalidMonthError: month is not 0-12
    """
    month = validate_month(month)
    if month == ALL_TIME:
        return sum((expense.amount for expense in expenses), ZERO)
    return monthly_total(month, expenses)


def set_budget(config: BudgetConfig, amount: AmountLike) -> BudgetConfig:
    """
    Replace the monthly budget.

    Only positive amounts are accepted, so a budget can not be put
    back to 0 once set (the default config is the only source of 0).

    Raises:
        InvalidAmountError: amount is not a finite number > 0
    """
    value = validate_amount(amount, field="budget amount")
    return config.model_copy(update={"monthly_budget": value})
