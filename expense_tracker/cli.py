"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import sys
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from tracker_core import __version__
from tracker_core.config import DEFAULT_EXPORT_FILE, Settings
from tracker_core.exceptions import (
    PersistenceError,
    RecordNotFoundError,
    ValidationError,
)
from tracker_core.formatting import money, month_name, plain_number, render_expense_table
from tracker_core.log import configure_logging, get_logger
from tracker_core.models import CATEGORIES
from tracker_core.services import ExpenseService
from tracker_core.validators import validate_amount

PROG = "expense-tracker"

logger = get_logger(__name__)


def _parse_amount(value: str) -> Decimal:
    try:
        return validate_amount(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _comma_join(items: Iterable[str]) -> str:
    return ", ".join(items)


def say(message: str = "") -> None:
    """Print one line of user-facing output in the tool's ``# `` style."""
    print(f"# {message}")


def handle_add(args: argparse.Namespace, service: ExpenseService) -> None:
    expense = service.add(args.description, args.amount, args.category)
    say(f"Expense added successfully (ID: {expense.id})")


def handle_list(args: argparse.Namespace, service: ExpenseService) -> None:
    expenses = service.list(category=args.category)
    if not expenses:
        say("No expenses found")
        return
    for line in render_expense_table(expenses):
        say(line)


def handle_update(args: argparse.Namespace, service: ExpenseService) -> None:
    try:
        service.update(
            args.id,
            description=args.description,
            amount=args.amount,
            category=args.category,
        )
    except RecordNotFoundError as exc:
        say(str(exc))
        return
    say("Expense updated successfully")


def handle_delete(args: argparse.Namespace, service: ExpenseService) -> None:
    try:
        service.delete(args.id)
    except RecordNotFoundError as exc:
        say(str(exc))
        return
    say("Expense deleted successfully")


def handle_set_budget(args: argparse.Namespace, service: ExpenseService) -> None:
    budget = service.set_budget(args.month, args.amount)
    say(f"Budget for {month_name(args.month)} set to ${plain_number(budget)}")


def handle_summary(args: argparse.Namespace, service: ExpenseService) -> None:
    summary = service.summarize(
        month=args.month,
        category=args.category,
        by_category=args.by_category,
    )
    if summary.month:
        name = month_name(summary.month)
        say(f"Total expenses for {name}: ${plain_number(summary.total)}")
        if summary.budget is not None:
            if summary.over_budget:
                say(
                    f"WARNING: You've exceeded your {name} budget of "
                    f"${plain_number(summary.budget)} by ${money(summary.budget_delta)}"
                )
            else:
                say(f"Remaining budget for {name}: ${money(summary.budget_delta)}")
    else:
        say(f"Total expenses: ${plain_number(summary.total)}")

    if summary.by_category is not None:
        print()
        say("Expenses by category:")
        for category, amount in summary.by_category.items():
            say(f"{category.ljust(12)}: ${money(amount)}")


def handle_export(args: argparse.Namespace, service: ExpenseService) -> None:
    output_file = args.file or DEFAULT_EXPORT_FILE
    service.export_csv(output_file)
    say(f"Expenses exported to {output_file}")


HANDLERS: Dict[str, Callable[[argparse.Namespace, ExpenseService], None]] = {
    "add": handle_add,
    "list": handle_list,
    "update": handle_update,
    "delete": handle_delete,
    "set-budget": handle_set_budget,
    "summary": handle_summary,
    "export": handle_export,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="CLI tool to track your expenses")
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory to store JSON data (default: $EXPENSE_TRACKER_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Console log level (default: $EXPENSE_TRACKER_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a new expense")
    add.add_argument("extra", nargs="*", help="Additional arguments (ignored)")
    add.add_argument("-d", "--description", required=True, help="Expense description")
    add.add_argument("-a", "--amount", required=True, type=_parse_amount, help="Expense amount")
    add.add_argument(
        "-c", "--category", help=f"Expense category ({_comma_join(CATEGORIES)})"
    )

    list_ = subparsers.add_parser("list", help="List all expenses with full details")
    list_.add_argument("-c", "--category", help="Filter by category")

    update = subparsers.add_parser("update", help="Update an expense by ID")
    update.add_argument("-i", "--id", required=True, type=int, help="Expense ID to update")
    update.add_argument("-d", "--description", help="New description")
    update.add_argument("-a", "--amount", type=_parse_amount, help="New amount")
    update.add_argument("-c", "--category", help="New category")

    delete = subparsers.add_parser("delete", help="Delete an expense by ID")
    delete.add_argument("-i", "--id", required=True, type=int, help="Expense ID to delete")

    budget = subparsers.add_parser("set-budget", help="Set monthly budget")
    budget.add_argument("-m", "--month", required=True, type=int, help="Month (1-12)")
    budget.add_argument("-a", "--amount", required=True, type=_parse_amount, help="Budget amount")

    summary = subparsers.add_parser("summary", help="Show summary of expenses")
    summary.add_argument("-m", "--month", type=int, help="Filter by month (1-12)")
    summary.add_argument("-c", "--category", help="Filter by category")
    summary.add_argument(
        "-g", "--by-category", action="store_true", help="Group expenses by category"
    )

    export = subparsers.add_parser("export", help="Export expenses to CSV file")
    export.add_argument(
        "-f", "--file", help=f"Output file path (default: {DEFAULT_EXPORT_FILE})"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or settings.log_level, settings.log_file)
    data_dir = args.data_dir or settings.data_dir
    logger.debug("Running %s with data dir %s", args.command, data_dir)

    try:
        service = ExpenseService.from_data_dir(data_dir)
        HANDLERS[args.command](args, service)
    except ValidationError as exc:
        logger.info("Validation failed for %s: %s", args.command, exc)
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except PersistenceError as exc:
        logger.info("Storage failure during %s: %s", args.command, exc)
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
