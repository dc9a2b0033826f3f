"""Expense Tracker CLI - record expenses, check the budget, export.

Commands:
  expense-tracker add --amount <amount> --description <text> --category <category>
  expense-tracker list
  expense-tracker summary [--month <month>]
  expense-tracker delete --id <expense_id>
  expense-tracker filter --category <category>
  expense-tracker set-budget --amount <amount>
  expense-tracker export
"""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from expense_tracker import __version__
from expense_tracker.audit import AuditLogger
from expense_tracker.config import TrackerSettings, get_settings
from expense_tracker.ledger import ExpenseNotFoundError, LedgerError
from expense_tracker.ledger.export import format_amount
from expense_tracker.models.commands import (
    COMMAND_MODELS,
    AddCommand,
    DeleteCommand,
    ExportCommand,
    FilterCommand,
    SetBudgetCommand,
    SummaryCommand,
)
from expense_tracker.models.expense import ExpenseCategory, ExpenseRecord
from expense_tracker.orchestrator import ExpenseTrackerFlow, create_app_components
from expense_tracker.services.storage import StorageError


# Messages for options that fail boundary validation
OPTION_ERRORS = {
    "amount": "Please provide a valid positive number for amount.",
    "category": (
        "Please provide a valid category: "
        + ", ".join(ExpenseCategory.choices())
        + "."
    ),
    "month": "Please provide a valid month (1-12) or nothing for all time summary.",
    "id": "Please provide a numeric expense ID.",
    "description": "Please provide a description using --description <description>.",
}

# Printed when a command's own options can't be parsed
COMMAND_USAGE = {
    "add": "Usage: expense-tracker add --amount <amount> --description <description> --category <category>",
    "list": "Usage: expense-tracker list",
    "summary": "Usage: expense-tracker summary [--month <month>]",
    "delete": "Usage: expense-tracker delete --id <expense_id>",
    "filter": "Usage: expense-tracker filter --category <category>",
    "set-budget": "Usage: expense-tracker set-budget --amount <amount>",
    "export": "Usage: expense-tracker export [--path <file>]",
}

USAGE = """Usage: expense-tracker <command> [options]
Commands:
  add --amount <amount> --description <description> --category <category>
                                                     Add a new expense
  list                                               List all expenses
  summary --month <month>                            Show summary of expenses for a month
  delete --id <expense_id>                           Delete an expense by ID
  filter --category <category>                       List expenses by category
  set-budget --amount <amount>                       Set monthly budget
  export                                             Export expenses to CSV"""


def money(amount: Decimal, symbol: str = "$") -> str:
    return f"{symbol}{format_amount(amount)}"


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def cmd_add(flow: ExpenseTrackerFlow, command: AddCommand, settings: TrackerSettings) -> None:
    """Add an expense, warning when it breaks the monthly budget."""
    outcome = flow.add_expense(command.amount, command.description, command.category)
    if outcome.budget_warning:
        budget = money(outcome.budget_warning.monthly_budget, settings.currency_symbol)
        print(f"⚠️ Warning: Adding this expense exceeds your monthly budget of {budget}.")
    print(f"# Expense added successfully (ID: {outcome.expense.id})")


def render_expenses(expenses: list[ExpenseRecord], settings: TrackerSettings) -> None:
    if not expenses:
        print("No expenses found.")
        return
    print("# ID\t| Category\t| Date\t\t| Amount\t\t| Description")
    for expense in expenses:
        print(
            f"# {expense.id}\t| {expense.category.value}\t| {expense.date.isoformat()}"
            f"\t| {money(expense.amount, settings.currency_symbol)}\t\t| {expense.description}"
        )


def cmd_list(flow: ExpenseTrackerFlow, command, settings: TrackerSettings) -> None:
    render_expenses(flow.list_expenses(), settings)


def cmd_filter(flow: ExpenseTrackerFlow, command: FilterCommand, settings: TrackerSettings) -> None:
    render_expenses(flow.list_expenses(command.category), settings)


def cmd_summary(flow: ExpenseTrackerFlow, command: SummaryCommand, settings: TrackerSettings) -> None:
    total = money(flow.summarize(command.month), settings.currency_symbol)
    if command.month == 0:
        print(f"Total expenses: {total}")
    else:
        print(f"Total expenses for month {command.month}: {total}")


def cmd_delete(flow: ExpenseTrackerFlow, command: DeleteCommand, settings: TrackerSettings) -> None:
    flow.delete_expense(command.id)
    print(f"✅ Expense with ID: {command.id} deleted successfully.")


def cmd_set_budget(flow: ExpenseTrackerFlow, command: SetBudgetCommand, settings: TrackerSettings) -> None:
    config = flow.set_budget(command.amount)
    print(f"Budget set to {money(config.monthly_budget, settings.currency_symbol)} successfully.")


def cmd_export(flow: ExpenseTrackerFlow, command: ExportCommand, settings: TrackerSettings) -> None:
    result = flow.export(command.path)
    print(f"Expenses exported to {Path(result.path).name} successfully.")


HANDLERS = {
    "add": cmd_add,
    "list": cmd_list,
    "summary": cmd_summary,
    "delete": cmd_delete,
    "filter": cmd_filter,
    "set-budget": cmd_set_budget,
    "export": cmd_export,
}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class CommandLineError(Exception):
    """Raised instead of exiting when argparse rejects the arguments."""

    def __init__(self, message: str, usage: str):
        self.message = message
        self.usage = usage
        super().__init__(message)


class TrackerArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser that raises CommandLineError on bad arguments.

    Subcommand parsers are built from this class too, so each one
    carries the usage line to show for its own command.
    """

    def __init__(self, *args, usage_line: str = USAGE, **kwargs):
        super().__init__(*args, **kwargs)
        self.usage_line = usage_line

    def error(self, message):
        raise CommandLineError(message, self.usage_line)


def build_parser() -> argparse.ArgumentParser:
    parser = TrackerArgumentParser(
        prog="expense-tracker",
        description="Personal expense tracker with a monthly budget alert.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding expenses.json and config.json",
    )
    sub = parser.add_subparsers(dest="command")

    add = sub.add_parser("add", help="Add a new expense", usage_line=COMMAND_USAGE["add"])
    add.add_argument("--amount", required=True, help="Amount spent")
    add.add_argument("--description", required=True, help="What the money was spent on")
    add.add_argument(
        "--category",
        required=True,
        help="One of: " + ", ".join(ExpenseCategory.choices()),
    )

    sub.add_parser("list", help="List all expenses", usage_line=COMMAND_USAGE["list"])

    summary = sub.add_parser(
        "summary",
        help="Show total expenses for a month or all time",
        usage_line=COMMAND_USAGE["summary"],
    )
    summary.add_argument("--month", default=None, help="Month 1-12; omit for all time")

    delete = sub.add_parser(
        "delete",
        help="Delete an expense by ID",
        usage_line=COMMAND_USAGE["delete"],
    )
    delete.add_argument("--id", required=True, help="Expense ID")

    filter_ = sub.add_parser(
        "filter",
        help="List expenses by category",
        usage_line=COMMAND_USAGE["filter"],
    )
    filter_.add_argument("--category", required=True, help="Category to show")

    budget = sub.add_parser(
        "set-budget",
        help="Set the monthly budget",
        usage_line=COMMAND_USAGE["set-budget"],
    )
    budget.add_argument("--amount", required=True, help="Monthly budget amount")

    export = sub.add_parser(
        "export",
        help="Export expenses to CSV",
        usage_line=COMMAND_USAGE["export"],
    )
    export.add_argument("--path", default=None, help="Output file (default: expenses.csv)")

    return parser


def parse_command(args: argparse.Namespace):
    """
    Build the typed command model for parsed arguments.

    Raises:
        pydantic.ValidationError: an option has the wrong shape
    """
    options = {
        key: value
        for key, value in vars(args).items()
        if key not in ("command", "data_dir") and value is not None
    }
    return COMMAND_MODELS[args.command].model_validate(options)


def render_validation_error(error: ValidationError) -> None:
    seen = set()
    for issue in error.errors():
        field = str(issue["loc"][0]) if issue["loc"] else ""
        message = OPTION_ERRORS.get(field, f"Invalid value for --{field}: {issue['msg']}")
        if message not in seen:
            seen.add(message)
            print(message)


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    print("Welcome to the Expense Tracker!")

    wants_help = any(flag in argv for flag in ("-h", "--help", "--version"))
    if not wants_help and _first_command(argv) not in HANDLERS:
        print("Please provide a valid command.")
        print(USAGE)
        return 0

    try:
        args = parser.parse_args(argv)
    except CommandLineError as e:
        print(e.usage)
        return 0

    settings = get_settings()
    if args.data_dir:
        settings = settings.model_copy(update={"data_dir": Path(args.data_dir)})

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        stream=sys.stderr,
        format="%(message)s",
    )

    try:
        command = parse_command(args)
    except ValidationError as e:
        render_validation_error(e)
        return 0

    flow = create_app_components(settings, audit_logger=AuditLogger())
    try:
        HANDLERS[args.command](flow, command, settings)
    except ExpenseNotFoundError as e:
        print(f"❌ {e}")
    except LedgerError as e:
        print(str(e))
    except (StorageError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def _first_command(argv: list[str]) -> Optional[str]:
    """The first positional argument, skipping `--data-dir <dir>`."""
    skip_next = False
    for arg in argv:
        if skip_next:
            skip_next = False
            continue
        if arg == "--data-dir":
            skip_next = True
            continue
        if arg.startswith("-"):
            continue
        return arg
    return None


if __name__ == "__main__":
    sys.exit(main())
